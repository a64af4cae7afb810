import os
import unittest
from unittest import mock

import requests

from cscserver.config import ScraperConfig
from cscserver.ingestion.page_fetcher import (
    PageFetcher,
    absolute_link,
    fetched_records,
    page_url,
    parse_listing,
)


BASE_ORIGIN = "https://www.fs-umi.ac.ma"
BASE_URL = "https://www.fs-umi.ac.ma/index.php/actualites/"


def _fixture(name):
    path = os.path.join(os.path.dirname(__file__), "fixtures", name)
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def _response(text="", status=200):
    resp = mock.Mock()
    resp.text = text
    resp.status_code = status
    if status >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status} Server Error")
    else:
        resp.raise_for_status.return_value = None
    return resp


class TestPageUrl(unittest.TestCase):
    def test_first_page_is_bare_listing(self):
        self.assertEqual(page_url(BASE_URL, 1), BASE_URL)

    def test_later_pages_use_suffix(self):
        self.assertEqual(page_url(BASE_URL, 2), BASE_URL + "page/2/")
        self.assertEqual(page_url(BASE_URL.rstrip("/"), 3), BASE_URL + "page/3/")

    def test_rejects_page_zero(self):
        with self.assertRaises(ValueError):
            page_url(BASE_URL, 0)


class TestParseListing(unittest.TestCase):
    def setUp(self):
        self.records = parse_listing(_fixture("listing_page.html"), BASE_ORIGIN)

    def test_keeps_only_articles_with_title_and_link(self):
        titles = [r.title for r in self.records]
        self.assertEqual(titles, ["Journée portes ouvertes", "Résultats des examens"])

    def test_extracts_all_fields(self):
        first = self.records[0]
        self.assertEqual(first.date, "12 mars 2024")
        self.assertEqual(first.link, "https://www.fs-umi.ac.ma/index.php/actualites/journee-portes-ouvertes/")
        self.assertEqual(first.image_url, "https://www.fs-umi.ac.ma/wp-content/uploads/2024/03/jpo.jpg")
        self.assertEqual(first.categories, ("Evénements", "Etudiants"))

    def test_relative_link_made_absolute(self):
        second = self.records[1]
        self.assertEqual(second.link, "https://www.fs-umi.ac.ma/index.php/actualites/resultats-examens/")
        self.assertIsNone(second.image_url)
        self.assertEqual(second.categories, ())

    def test_absolute_link_examples(self):
        self.assertEqual(
            absolute_link("/index.php/actualites/x", BASE_ORIGIN),
            "https://www.fs-umi.ac.ma/index.php/actualites/x",
        )
        self.assertEqual(absolute_link("http://other.example/a", BASE_ORIGIN), "http://other.example/a")

    def test_empty_document_yields_nothing(self):
        self.assertEqual(parse_listing("", BASE_ORIGIN), [])
        self.assertEqual(parse_listing("<html><body><p>Maintenance</p></body></html>", BASE_ORIGIN), [])


class TestPageFetcher(unittest.TestCase):
    def setUp(self):
        self.config = ScraperConfig(pages_to_fetch=3, request_delay_ms=1000, request_timeout=10)
        self.session = mock.Mock()
        self.sleeps = []
        self.fetcher = PageFetcher(self.config, session=self.session, sleep=self.sleeps.append)

    def test_fetch_page_sends_timeout_and_user_agent(self):
        self.session.get.return_value = _response(_fixture("listing_page.html"))
        result = self.fetcher.fetch_page(BASE_URL)
        self.assertTrue(result.ok)
        self.assertEqual(len(result.records), 2)
        _, kwargs = self.session.get.call_args
        self.assertEqual(kwargs["timeout"], 10)
        self.assertIn("Mozilla/5.0", kwargs["headers"]["User-Agent"])

    def test_network_error_returns_empty_result(self):
        self.session.get.side_effect = requests.ConnectionError("connection refused")
        with self.assertLogs("cscserver.ingestion.page_fetcher", level="ERROR"):
            result = self.fetcher.fetch_page(BASE_URL)
        self.assertFalse(result.ok)
        self.assertEqual(result.records, [])
        self.assertIn("connection refused", result.error)

    def test_http_error_returns_empty_result(self):
        self.session.get.return_value = _response("oops", status=503)
        with self.assertLogs("cscserver.ingestion.page_fetcher", level="ERROR"):
            result = self.fetcher.fetch_page(BASE_URL)
        self.assertFalse(result.ok)
        self.assertEqual(result.records, [])

    def test_empty_page_is_not_an_error(self):
        self.session.get.return_value = _response("<html><body></body></html>")
        result = self.fetcher.fetch_page(BASE_URL)
        self.assertTrue(result.ok)
        self.assertEqual(result.records, [])

    def test_fetch_all_is_sequential_with_delay_between_pages(self):
        self.session.get.side_effect = [
            _response(_fixture("listing_page.html")),
            requests.Timeout("read timed out"),
            _response(_fixture("listing_page.html")),
        ]
        results = self.fetcher.fetch_all()

        urls = [c.args[0] for c in self.session.get.call_args_list]
        self.assertEqual(urls, [BASE_URL, BASE_URL + "page/2/", BASE_URL + "page/3/"])
        self.assertEqual(self.sleeps, [1.0, 1.0])
        self.assertEqual([r.ok for r in results], [True, False, True])
        self.assertEqual(len(fetched_records(results)), 4)

    def test_single_page_does_not_sleep(self):
        fetcher = PageFetcher(ScraperConfig(pages_to_fetch=1), session=self.session, sleep=self.sleeps.append)
        self.session.get.return_value = _response("")
        fetcher.fetch_all()
        self.assertEqual(self.sleeps, [])


if __name__ == "__main__":
    unittest.main()

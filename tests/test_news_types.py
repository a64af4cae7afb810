import unittest

from cscserver.ingestion.news_types import NewsRecord, RunOutcome, split_categories


class TestNewsRecord(unittest.TestCase):
    def test_to_row_joins_categories(self):
        r = NewsRecord(
            title="Soutenance",
            date="3 avril 2024",
            link="https://www.fs-umi.ac.ma/index.php/actualites/soutenance/",
            image_url=None,
            categories=("Recherche", "Doctorat"),
        )
        self.assertEqual(
            r.to_row(),
            ["Soutenance", "3 avril 2024", "https://www.fs-umi.ac.ma/index.php/actualites/soutenance/", "", "Recherche, Doctorat"],
        )

    def test_from_row_tolerates_short_rows(self):
        r = NewsRecord.from_row(["Titre seul", "5 mai 2024"])
        self.assertEqual(r.title, "Titre seul")
        self.assertEqual(r.date, "5 mai 2024")
        self.assertEqual(r.link, "")
        self.assertIsNone(r.image_url)
        self.assertEqual(r.categories, ())

    def test_from_row_splits_and_trims_categories(self):
        r = NewsRecord.from_row(["T", "d", "https://x/", "https://x/i.jpg", " A ,B,, C "])
        self.assertEqual(r.image_url, "https://x/i.jpg")
        self.assertEqual(r.categories, ("A", "B", "C"))

    def test_dict_shape(self):
        r = NewsRecord(title="T", date="d", link="https://x/", categories=("A",))
        self.assertEqual(
            r.to_dict(),
            {"title": "T", "date": "d", "link": "https://x/", "image_url": None, "categories": ["A"]},
        )
        self.assertEqual(NewsRecord.from_dict(r.to_dict()), r)

    def test_from_dict_defaults(self):
        r = NewsRecord.from_dict({"title": "C"})
        self.assertEqual(r, NewsRecord(title="C", date="", link=""))

    def test_split_categories_accepts_lists(self):
        self.assertEqual(split_categories(["A", " B ", ""]), ("A", "B"))
        self.assertEqual(split_categories(None), ())


class TestRunOutcome(unittest.TestCase):
    def test_to_dict_keys(self):
        out = RunOutcome(success=True, total=5, new=2, store_updated=False)
        self.assertEqual(
            out.to_dict(),
            {"success": True, "total": 5, "new": 2, "storeUpdated": False, "error": None},
        )


if __name__ == "__main__":
    unittest.main()

import unittest

from cscserver.diagnostics import ERROR, WARN, config_report, has_errors


class TestConfigReport(unittest.TestCase):
    def test_complete_config_has_no_errors(self):
        env = {
            "API_KEY": "abcdefghijklmnop",
            "PORT": "8080",
            "ALLOWED_ORIGINS": "https://a.example,https://b.example",
            "YAHOO_EMAIL": "bot@yahoo.com",
            "YAHOO_APP_PASSWORD": "pw",
            "GOOGLE_SERVICE_ACCOUNT_EMAIL": "x",
            "GOOGLE_PRIVATE_KEY": "y",
            "GOOGLE_SPREADSHEET_6ID": "z",
        }
        lines = config_report(env)
        self.assertFalse(has_errors(lines))
        text = "\n".join(line.message for line in lines)
        self.assertIn("abcd...mnop", text)
        self.assertNotIn("abcdefghijklmnop", text)
        self.assertIn("PORT: 8080", text)

    def test_missing_key_and_email_are_errors(self):
        lines = config_report({})
        self.assertTrue(has_errors(lines))
        errors = [line.message for line in lines if line.level == ERROR]
        self.assertIn("API_KEY is not set in .env file", errors)
        self.assertIn("YAHOO_EMAIL is not set", errors)

    def test_whitespace_and_open_cors_are_warnings(self):
        lines = config_report({"API_KEY": " key-with-space "})
        warnings = [line.message for line in lines if line.level == WARN]
        self.assertIn("API_KEY has leading/trailing whitespace", warnings)
        self.assertIn("ALLOWED_ORIGINS is not set (will allow all origins)", warnings)


if __name__ == "__main__":
    unittest.main()

import unittest

from content_sentiment.nlp.cleaner import clean_text


class TestCleanText(unittest.TestCase):
    """Test cases for shortcode stripping"""

    def test_empty_text(self):
        """Empty or missing text returns an empty string"""
        self.assertEqual(clean_text(""), "")
        self.assertEqual(clean_text(None), "")

    def test_no_brackets(self):
        """Text without brackets is only trimmed"""
        self.assertEqual(clean_text("  padded  "), "padded")
        self.assertEqual(clean_text("plain text"), "plain text")

    def test_span_removed_keeps_surrounding_text(self):
        self.assertEqual(clean_text("hello [shortcode]world"), "hello world")

    def test_nested_brackets(self):
        """Inner content stays suppressed while depth is above zero"""
        self.assertEqual(clean_text("[a[b]c]keep"), "keep")

    def test_paired_shortcodes(self):
        self.assertEqual(clean_text("I love [b]this[/b] product"), "I love this product")
        self.assertEqual(clean_text("[quote]I hate[/quote]"), "I hate")

    def test_trim_after_removal(self):
        self.assertEqual(clean_text("[caption] Nice photo [/caption]"), "Nice photo")

    def test_only_shortcodes(self):
        self.assertEqual(clean_text('[gallery ids="1,2,3"]'), "")

    def test_unmatched_closing_bracket_is_not_clamped(self):
        """A stray ']' drives depth negative until a '[' restores it"""
        self.assertEqual(clean_text("x]yz"), "x")
        self.assertEqual(clean_text("a]b[c"), "ac")

    def test_unclosed_opening_bracket(self):
        self.assertEqual(clean_text("keep [dropped forever"), "keep")

    def test_multiline_content(self):
        self.assertEqual(clean_text("\nline one\n[embed]url[/embed]\nline two\n"), "line one\nurl\nline two")


if __name__ == "__main__":
    unittest.main()

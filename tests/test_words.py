import unittest
from decimal import Decimal

from gst_invoice.words import MAX_RUPEES, AmountWords, amount_words, integer_words, to_words


class AmountInWordsTests(unittest.TestCase):
    def test_zero(self) -> None:
        self.assertEqual(to_words(0), "Rupees Zero Only")
        self.assertEqual(to_words(Decimal("0.001")), "Rupees Zero Only")

    def test_hundred(self) -> None:
        self.assertEqual(to_words(100), "Rupees One Hundred Only")

    def test_lakh_grouping(self) -> None:
        self.assertEqual(
            to_words(1234567),
            "Rupees Twelve Lakh Thirty Four Thousand Five Hundred Sixty Seven Only",
        )

    def test_crore_grouping(self) -> None:
        self.assertEqual(to_words(10_000_000), "Rupees One Crore Only")
        self.assertEqual(to_words(105000), "Rupees One Lakh Five Thousand Only")
        self.assertEqual(to_words(20), "Rupees Twenty Only")

    def test_paise_clause_is_wrapped_once(self) -> None:
        words = to_words(100.50)

        self.assertEqual(words, "Rupees One Hundred and Paise Fifty Only")
        self.assertEqual(words.count("Rupees"), 1)
        self.assertEqual(words.count("Only"), 1)
        self.assertIn("and Paise Fifty Only", words)

    def test_structured_result(self) -> None:
        self.assertEqual(amount_words("1234.567"), AmountWords("One Thousand Two Hundred Thirty Four", "Fifty Seven"))
        self.assertEqual(amount_words(7), AmountWords("Seven"))

    def test_paise_only(self) -> None:
        self.assertEqual(to_words(Decimal("0.50")), "Rupees Zero and Paise Fifty Only")

    def test_largest_supported_amount(self) -> None:
        self.assertEqual(
            integer_words(999_999_999),
            "Ninety Nine Crore Ninety Nine Lakh Ninety Nine Thousand Nine Hundred Ninety Nine",
        )

    def test_to_words_documents_its_range(self) -> None:
        self.assertIn("100 crore", to_words.__doc__)
        self.assertEqual(to_words(MAX_RUPEES).count("Crore"), 1)

    def test_hundred_crore_is_out_of_range(self) -> None:
        with self.assertRaises(ValueError):
            to_words(1_000_000_000)


if __name__ == "__main__":
    unittest.main()

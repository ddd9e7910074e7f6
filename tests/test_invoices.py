from solarops.services import invoices


def test_number_to_words_uses_indian_units():
    assert invoices.number_to_words(0) == "Zero"
    assert invoices.number_to_words(15) == "Fifteen"
    assert invoices.number_to_words(148000) == "One Lakh Forty Eight Thousand"
    assert invoices.number_to_words(205000) == "Two Lakh Five Thousand"
    assert invoices.number_to_words(12345678) == (
        "One Crore Twenty Three Lakh Forty Five Thousand Six Hundred Seventy Eight"
    )


def test_number_to_words_drops_paise():
    assert invoices.number_to_words(101.99) == "One Hundred One"


def test_amount_in_words_and_currency_format():
    assert invoices.amount_in_words(2500) == "Two Thousand Five Hundred Rupees Only"
    assert invoices.format_currency(1234.5) == "₹1234.50"
    assert invoices.format_currency(None) == "₹0.00"


def test_sequence_starts_at_one():
    assert invoices.next_sequence_number(None, "INV-") == "INV-000001"
    assert invoices.next_sequence_number("", "IN-") == "IN-000001"


def test_sequence_increments_previous_number():
    assert invoices.next_sequence_number("INV-000041", "INV-") == "INV-000042"
    assert invoices.next_sequence_number("IN-999999", "IN-") == "IN-1000000"


def test_sequence_reads_digits_right_after_prefix():
    assert invoices.next_sequence_number("IN-000001-A", "IN-") == "IN-000002"
    assert invoices.next_sequence_number("INV-000007/24", "INV-") == "INV-000008"


def test_unparsable_number_falls_back_to_clock_digits():
    result = invoices.next_sequence_number("INV-DRAFT", "INV-")
    assert result.startswith("INV-")
    assert len(result) == len("INV-") + 6
    assert result[4:].isdigit()


def test_invoice_totals_apply_tax_rates_to_line_value():
    items = [
        {"quantity": 2, "rate": 1000, "cgst_rate": 9, "sgst_rate": 9},
        {"quantity": 1, "rate": 500, "cgst_rate": 6, "sgst_rate": 6},
    ]
    totals = invoices.calculate_invoice_totals(items)
    assert totals["total_quantity"] == 3
    assert totals["taxable_value"] == 2500
    assert totals["total_cgst"] == 180 + 30
    assert totals["total_sgst"] == 180 + 30
    assert totals["total_amount"] == 2500 + 420


def test_invoice_totals_of_no_items_are_zero():
    assert invoices.calculate_invoice_totals([])["total_amount"] == 0

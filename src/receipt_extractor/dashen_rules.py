"""
Dashen Bank receipt ruleset.

Receipts are served by receipt.dashensuperapp.com as single-page PDFs
with label/value pairs such as:

    Sender Name  ABEBE KEBEDE
    Transaction Reference  FT24015ABC12
    Transaction Amount  ETB 500.00
    VAT (15%)  ETB 0.30

Only transaction reference and transaction amount are required.
"""

from receipt_extractor.field_rules import FieldRule, Ruleset, ValueKind, label

_TEXT      = r'(.+)'
_REFERENCE = r'([A-Z0-9\-]+)'
_ACCOUNT   = r'([A-Z0-9*\-]+)'
_PHONE     = r'(\+?[\d\-\s]*\d)'
_DATE      = r'([\d/\-,: ]+(?:[AP]M)?)'
_AMOUNT    = r'(?:ETB|Birr)?\s*([\d,]+(?:\.\d+)?)'

# "VAT (15%)", "Excise Tax (10%)"
_RATE = r'(?:\s*\(\s*\d+(?:\.\d+)?\s*%\s*\))?'


def _amount(name: str, title: str, label_re: str, required: bool = False) -> FieldRule:
    return FieldRule(name, title, label_re, _AMOUNT, ValueKind.AMOUNT, required=required)


DASHEN_RULES = (
    # ── Sender ────────────────────────────────────────────────────────────────
    FieldRule("sender_name", "Sender Name", label("Sender", "Name"), _TEXT, title_case=True),
    FieldRule(
        "sender_account_number", "Sender Account Number",
        label("Sender", "Account") + r'(?:\s*Number)?', _ACCOUNT,
    ),

    # ── Transaction details ───────────────────────────────────────────────────
    FieldRule("transaction_channel", "Transaction Channel", label("Transaction", "Channel"), _TEXT),
    FieldRule("service_type", "Service Type", label("Service", "Type"), _TEXT),
    FieldRule("narrative", "Narrative", label("Narrative"), _TEXT),

    # ── Receiver ──────────────────────────────────────────────────────────────
    FieldRule("receiver_name", "Receiver Name", label("Receiver", "Name"), _TEXT, title_case=True),
    FieldRule("phone_no", "Phone No", r'\bPhone(?:\s*Number|\s*No\.?)?', _PHONE),
    FieldRule("institution_name", "Institution Name", label("Institution", "Name"), _TEXT, title_case=True),

    # ── References & date ─────────────────────────────────────────────────────
    FieldRule(
        "transaction_reference", "Transaction Reference",
        label("Transaction", "Reference"), _REFERENCE, required=True,
    ),
    FieldRule("transfer_reference", "Transfer Reference", label("Transfer", "Reference"), _REFERENCE),
    FieldRule(
        "transaction_date", "Transaction Date",
        label("Transaction", "Date") + r'(?:\s*&\s*Time)?', _DATE, ValueKind.DATE,
    ),

    # ── Amounts & fees ────────────────────────────────────────────────────────
    _amount("transaction_amount", "Transaction Amount", label("Transaction", "Amount"), required=True),
    _amount("service_charge", "Service Charge", label("Service", "Charge")),
    _amount("excise_tax", "Excise Tax", label("Excise", "Tax") + _RATE),
    _amount("vat", "VAT", label("VAT") + _RATE),
    _amount("penalty_fee", "Penalty Fee", label("Penalty", "Fee")),
    _amount("income_tax_fee", "Income Tax Fee", label("Income", "Tax", "Fee")),
    _amount("interest_fee", "Interest Fee", label("Interest", "Fee")),
    _amount("stamp_duty", "Stamp Duty", label("Stamp", "Duty")),
    _amount("discount_amount", "Discount Amount", label("Discount", "Amount")),
    _amount("total", "Total", label("Total")),
)

DASHEN_RULESET = Ruleset(
    name="dashen",
    rules=DASHEN_RULES,
    boundaries=(
        label("Description"),
        label("Thank", "you"),
    ),
    date_formats=(
        # month-first before day-first; day-first only wins when day > 12
        "%m/%d/%Y %I:%M:%S %p",
        "%m/%d/%Y %I:%M %p",
        "%m/%d/%Y %H:%M:%S",
        "%m/%d/%Y %H:%M",
        "%d/%m/%Y %I:%M:%S %p",
        "%d/%m/%Y %H:%M:%S",
        "%d/%m/%Y %H:%M",
        "%Y-%m-%d %H:%M:%S",
        "%Y-%m-%d %H:%M",
        "%d-%m-%Y %H:%M:%S",
        "%d-%m-%Y %H:%M",
        "%m/%d/%Y",
        "%d/%m/%Y",
        "%Y-%m-%d",
    ),
    utc_offset_hours=3,
)

"""Input masks for Brazilian customer documents, phones and postal codes.

Masks format whatever digits are present and never reject input: a partial
value yields a partial mask. Each pattern rewrites only its first match, so
digits beyond the pattern stay appended and `unmask` always recovers every
digit that was typed.
"""

import re

_NON_DIGITS = re.compile(r"\D")

_PHONE_LANDLINE = re.compile(r"(\d{2})(\d{4})(\d{0,4})")
_PHONE_MOBILE = re.compile(r"(\d{2})(\d{5})(\d{0,4})")
_CPF = re.compile(r"(\d{3})(\d{3})(\d{3})(\d{0,2})")
_CNPJ = re.compile(r"(\d{2})(\d{3})(\d{3})(\d{4})(\d{0,2})")
_CEP = re.compile(r"(\d{5})(\d{0,3})")

POSTAL_CODE_LENGTH = 8


def unmask(value: str) -> str:
    """Strip every non-digit character."""
    return _NON_DIGITS.sub("", value or "")


def mask_phone(value: str) -> str:
    """Format as ``(AA) BBBB-CCCC`` up to 10 digits, ``(AA) BBBBB-CCCC`` beyond."""
    digits = unmask(value)
    pattern = _PHONE_LANDLINE if len(digits) <= 10 else _PHONE_MOBILE
    return pattern.sub(r"(\1) \2-\3", digits, count=1)


def mask_tax_id(value: str) -> str:
    """Format as an individual id (CPF) up to 11 digits, else an organization id (CNPJ)."""
    digits = unmask(value)
    if len(digits) <= 11:
        return _CPF.sub(r"\1.\2.\3-\4", digits, count=1)
    return _CNPJ.sub(r"\1.\2.\3/\4-\5", digits, count=1)


def mask_postal_code(value: str) -> str:
    """Format as ``AAAAA-BBB``."""
    return _CEP.sub(r"\1-\2", unmask(value), count=1)


def is_complete_postal_code(value: str) -> bool:
    return len(unmask(value)) == POSTAL_CODE_LENGTH

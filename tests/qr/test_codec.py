from __future__ import annotations

import hashlib
import string
from datetime import date

from src.qr_attendance.qr_attendance.qr.codec import build_payload, codes_match, derive_code, verify_code


def test_derive_code_is_twelve_lowercase_hex_chars():
    code = derive_code(date(2024, 3, 1), "s1")

    assert len(code) == 12
    assert set(code) <= set(string.hexdigits.lower())


def test_derive_code_is_sha256_prefix_of_salted_payload():
    expected = hashlib.sha256(b"2024-03-01|s1|attendance_qr_v1").hexdigest()[:12]

    assert build_payload(date(2024, 3, 1), "s1") == "2024-03-01|s1|attendance_qr_v1"
    assert derive_code(date(2024, 3, 1), "s1") == expected


def test_derive_code_is_deterministic():
    assert derive_code(date(2024, 3, 1), "s1") == derive_code(date(2024, 3, 1), "s1")


def test_derive_code_changes_with_date_and_secret():
    base = derive_code(date(2024, 3, 1), "s1")

    assert derive_code(date(2024, 3, 2), "s1") != base
    assert derive_code(date(2024, 3, 1), "s2") != base


def test_missing_secret_falls_back_to_default():
    assert derive_code(date(2024, 3, 1), None) == derive_code(date(2024, 3, 1), "default_secret_change_this")
    assert derive_code(date(2024, 3, 1), "") == derive_code(date(2024, 3, 1), None)


def test_verify_code_accepts_only_the_code_of_that_day():
    day = date(2024, 3, 1)
    code = derive_code(day, "s1")

    assert verify_code(code, day, "s1") is True
    assert verify_code(code, date(2024, 3, 2), "s1") is False
    assert verify_code(code, day, "other") is False


def test_verify_code_rejects_malformed_candidates_without_raising():
    day = date(2024, 3, 1)
    code = derive_code(day, "s1")

    assert verify_code(None, day, "s1") is False
    assert verify_code(123456789012, day, "s1") is False
    assert verify_code(code[:-1], day, "s1") is False
    assert verify_code(code + "0", day, "s1") is False
    assert verify_code(code.upper(), day, "s1") is (code == code.upper())
    assert codes_match("", code) is False

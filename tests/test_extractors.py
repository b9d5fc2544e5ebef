"""Tests for the field extractors."""

from datetime import datetime, timezone

import pytest
from registry_extractor.extractors import (
    MAX_ADDRESS_LENGTH,
    extract_address,
    extract_city,
    extract_name,
    extract_postal_code,
    extract_reg_no,
    extract_registration_date,
)


class TestExtractRegNo:
    """Test court file number extraction."""

    def test_extracts_value_up_to_line_break(self):
        result = extract_reg_no("Foo: HRB 12345\nbar")
        assert result.ok
        assert result.value == "HRB 12345"

    def test_real_header_line(self, header_line):
        assert extract_reg_no(header_line).value == "HRB 776767"

    def test_fails_without_line_break(self):
        result = extract_reg_no("Foo: HRB 12345")
        assert not result.ok
        assert result.value is None

    def test_fails_without_colon(self):
        result = extract_reg_no("HRB 12345\nbar")
        assert not result.ok

    def test_failure_echoes_text(self):
        result = extract_reg_no("no number here")
        assert "no number here" in result.error

    def test_empty_text(self):
        assert not extract_reg_no("").ok


class TestExtractRegistrationDate:
    """Test announcement date extraction."""

    def test_english_marker(self):
        result = extract_registration_date("... announced on:01.02.2024 14:30 o'clock")
        assert result.ok
        assert result.value == datetime(2024, 2, 1, 14, 30, tzinfo=timezone.utc)

    def test_german_marker(self, header_line):
        result = extract_registration_date(header_line)
        assert result.value == datetime(2024, 2, 1, 12, 0, tzinfo=timezone.utc)

    def test_result_is_utc(self, header_line):
        assert extract_registration_date(header_line).value.tzinfo == timezone.utc

    def test_malformed_payload_fails(self):
        result = extract_registration_date("announced on:not-a-date o'clock")
        assert not result.ok
        assert result.value is None

    def test_missing_marker_fails(self):
        assert not extract_registration_date("01.02.2024 14:30 Uhr").ok

    def test_single_digit_day_rejected(self):
        assert not extract_registration_date("announced on:1.02.2024 14:30 o'clock").ok

    def test_impossible_date_fails(self):
        assert not extract_registration_date("Bekannt gemacht am: 31.02.2024 10:00 Uhr").ok


class TestExtractName:
    """Test entity name extraction."""

    def test_second_token_of_first_section(self):
        assert extract_name("A: Foo, Berlin, Street 1").value == "Foo"

    def test_real_company_line(self, company_line):
        assert extract_name(company_line).value == "Acme GmbH"

    def test_no_colon_space_fails(self):
        result = extract_name("Foo, Berlin, Street 1")
        assert not result.ok
        assert "Foo, Berlin" in result.error

    def test_empty_text_fails(self):
        assert not extract_name("").ok


class TestExtractAddress:
    """Test street address extraction."""

    def test_third_section(self):
        assert extract_address("A: Foo, Berlin, Street 1").value == " Street 1"

    def test_too_few_sections_fails(self):
        assert not extract_address("A: Foo, Berlin").ok

    def test_long_address_flagged_but_returned(self):
        long_section = " " + "x" * (MAX_ADDRESS_LENGTH + 5)
        result = extract_address(f"A: Foo, Berlin,{long_section}")
        assert result.ok
        assert result.value == long_section
        assert result.warning is not None

    def test_normal_address_has_no_warning(self, company_line):
        assert extract_address(company_line).warning is None


class TestExtractCity:
    """Test city extraction."""

    def test_second_section(self):
        assert extract_city("A: Foo, Berlin, Street 1").value.strip() == "Berlin"

    def test_single_section_fails(self):
        assert not extract_city("A: Foo").ok


class TestExtractPostalCode:
    """Test postal code extraction."""

    def test_five_digit_run(self):
        assert extract_postal_code("Berlin, 10115 Germany").value == "10115"

    def test_no_five_digit_run_fails(self):
        result = extract_postal_code("Berlin, 1011 Germany")
        assert not result.ok

    def test_prefers_last_run_over_register_number(self, company_line):
        assert extract_postal_code(company_line).value == "70173"

    @pytest.mark.parametrize('text', ['', 'no digits at all', '12-34-5'])
    def test_various_misses(self, text):
        assert not extract_postal_code(text).ok

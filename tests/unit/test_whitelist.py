"""
Module 03 - Whitelist Schema, Address and Loader Tests
Tests for core/schemas/whitelist.py, core/whitelist/address.py and
core/whitelist/loader.py
"""
import json

import pytest
import yaml
from pydantic import ValidationError

from core.schemas.errors import InvalidAddressError, WhitelistLoadError
from core.schemas.whitelist import UINT256_MAX, Whitelist, WhitelistEntry
from core.whitelist.address import display_address, normalize_address
from core.whitelist.loader import WhitelistYamlLoader, load_whitelist, parse_whitelist
from fixtures.common import EXTENDED_ENTRIES, REFERENCE_ENTRIES, write_whitelist_file


MIXED = "0x5B38Da6a701c568545dCfcB03FcB875f56beddC4"
UPPER = "0x5B38DA6A701C568545DCFCB03FCB875F56BEDDC4"
LOWER = "0x5b38da6a701c568545dcfcb03fcb875f56beddc4"


class TestNormalizeAddress:
    """Tests for normalize_address()."""

    @pytest.mark.parametrize("text", [MIXED, UPPER, LOWER, LOWER[2:], UPPER[2:], "0X" + LOWER[2:]])
    def test_case_and_prefix_insensitive(self, text):
        assert normalize_address(text) == bytes.fromhex(LOWER[2:])

    def test_whitespace_stripped(self):
        assert normalize_address(f"  {LOWER}\n") == bytes.fromhex(LOWER[2:])

    def test_bytes_passthrough(self):
        raw = bytes.fromhex(LOWER[2:])

        assert normalize_address(raw) == raw

    def test_wrong_byte_length(self):
        with pytest.raises(InvalidAddressError):
            normalize_address(bytes(19))

    @pytest.mark.parametrize("text", ["", "0x", "0x1234", LOWER + "00", "0x" + "g" * 40])
    def test_invalid_text(self, text):
        with pytest.raises(InvalidAddressError):
            normalize_address(text)

    def test_non_string(self):
        with pytest.raises(InvalidAddressError):
            normalize_address(12345)

    def test_checksum_not_enforced(self):
        """A wrongly-checksummed mixed-case address is still accepted."""
        bad_checksum = "0x5b38DA6a701c568545dCfcB03FcB875f56beddC4"

        assert normalize_address(bad_checksum) == normalize_address(LOWER)

    def test_display_address_is_checksummed(self):
        assert display_address(bytes.fromhex(LOWER[2:])) == MIXED


class TestWhitelistEntry:
    """Tests for the WhitelistEntry schema."""

    def test_address_normalized(self):
        entry = WhitelistEntry(address=UPPER, amount=1)

        assert entry.address == LOWER
        assert entry.identity == bytes.fromhex(LOWER[2:])

    def test_as_record(self):
        entry = WhitelistEntry(address=MIXED, amount=5)

        assert entry.as_record() == (bytes.fromhex(LOWER[2:]), 5)

    def test_case_variants_equal(self):
        assert WhitelistEntry(address=MIXED, amount=1) == WhitelistEntry(address=UPPER, amount=1)

    def test_invalid_address(self):
        with pytest.raises(ValidationError):
            WhitelistEntry(address="0x1234", amount=1)

    def test_negative_amount(self):
        with pytest.raises(ValidationError):
            WhitelistEntry(address=LOWER, amount=-1)

    def test_amount_upper_bound(self):
        assert WhitelistEntry(address=LOWER, amount=UINT256_MAX).amount == UINT256_MAX

        with pytest.raises(ValidationError):
            WhitelistEntry(address=LOWER, amount=UINT256_MAX + 1)

    def test_bool_amount_rejected(self):
        with pytest.raises(ValidationError):
            WhitelistEntry(address=LOWER, amount=True)

    def test_extra_fields_forbidden(self):
        with pytest.raises(ValidationError):
            WhitelistEntry(address=LOWER, amount=1, note="x")

    def test_frozen(self):
        entry = WhitelistEntry(address=LOWER, amount=1)

        with pytest.raises(ValidationError):
            entry.amount = 2

    def test_from_raw_pair(self):
        assert WhitelistEntry.from_raw([UPPER, 3]).amount == 3

    def test_from_raw_dict(self):
        assert WhitelistEntry.from_raw({"address": UPPER, "amount": 3}).address == LOWER

    def test_from_raw_bad_shape(self):
        with pytest.raises(ValueError):
            WhitelistEntry.from_raw([UPPER])


class TestWhitelist:
    """Tests for the Whitelist schema."""

    def test_from_pairs(self):
        whitelist = Whitelist(entries=REFERENCE_ENTRIES)

        assert len(whitelist) == 3
        assert whitelist.entries[2].amount == 2

    def test_order_preserved(self):
        whitelist = Whitelist(entries=REFERENCE_ENTRIES)

        assert [e.address for e in whitelist.entries] == [a.lower() for a, _ in REFERENCE_ENTRIES]

    def test_records(self):
        records = Whitelist(entries=REFERENCE_ENTRIES).records()

        assert records[0] == (bytes.fromhex(UPPER[2:].lower()), 1)

    def test_find_duplicates_any_case(self):
        whitelist = Whitelist(entries=EXTENDED_ENTRIES)

        assert whitelist.find(LOWER) == [0, 6]

    def test_find_missing(self):
        assert Whitelist(entries=REFERENCE_ENTRIES).find("0x" + "11" * 20) == []


class TestParseWhitelist:
    """Tests for parse_whitelist()."""

    def test_list(self):
        assert len(parse_whitelist(REFERENCE_ENTRIES)) == 3

    @pytest.mark.parametrize("key", ["whitelist", "entries"])
    def test_wrapped(self, key):
        assert len(parse_whitelist({key: REFERENCE_ENTRIES})) == 3

    def test_objects(self):
        data = [{"address": a, "amount": n} for a, n in REFERENCE_ENTRIES]

        assert len(parse_whitelist(data)) == 3

    def test_mapping_without_key(self):
        with pytest.raises(WhitelistLoadError, match="'whitelist' or 'entries'"):
            parse_whitelist({"addresses": []})

    def test_not_a_list(self):
        with pytest.raises(WhitelistLoadError):
            parse_whitelist("0x1234")

    def test_invalid_entry(self):
        with pytest.raises(WhitelistLoadError) as exc_info:
            parse_whitelist([[LOWER, 1], ["0xnothex", 1]], source="test")

        assert exc_info.value.code == "WHITELIST_LOAD_ERROR"
        assert exc_info.value.details["path"] == "test"
        assert exc_info.value.details["errors"]

    def test_negative_amount_entry(self):
        with pytest.raises(WhitelistLoadError):
            parse_whitelist([[LOWER, -5]])

    def test_empty_list_parses(self):
        assert len(parse_whitelist([])) == 0


class TestLoadWhitelist:
    """Tests for load_whitelist()."""

    def test_json(self, tmp_path):
        path = write_whitelist_file(tmp_path)

        assert len(load_whitelist(path)) == 3

    @pytest.mark.parametrize("name", ["whitelist.yaml", "whitelist.yml"])
    def test_yaml(self, tmp_path, name):
        path = write_whitelist_file(tmp_path, name=name, wrap_key="whitelist")

        whitelist = load_whitelist(path)

        assert len(whitelist) == 3
        assert whitelist.entries[0].address == LOWER

    def test_large_amount_in_json(self, tmp_path):
        path = write_whitelist_file(tmp_path, entries=[[LOWER, UINT256_MAX]])

        assert load_whitelist(path).entries[0].amount == UINT256_MAX

    def test_handwritten_yaml_unquoted_addresses(self, tmp_path):
        """Unquoted 0x addresses stay strings instead of becoming hex ints."""
        path = tmp_path / "whitelist.yaml"
        path.write_text(
            "whitelist:\n"
            "  - [0x5B38Da6a701c568545dCfcB03FcB875f56beddC4, 1]\n"
            "  - [0xDCAB482177A592E424D1C8318A464FC922E8DE40, 2]\n"
            "  - address: 0x09BAAB19FC77C19898140DADD30C4685C597620B\n"
            "    amount: 3\n"
        )

        whitelist = load_whitelist(path)

        assert [e.address for e in whitelist.entries] == [
            LOWER,
            "0xdcab482177a592e424d1c8318a464fc922e8de40",
            "0x09baab19fc77c19898140dadd30c4685c597620b",
        ]
        assert [e.amount for e in whitelist.entries] == [1, 2, 3]

    def test_yaml_loader_keeps_decimal_ints(self):
        data = yaml.load("[0x10, 16, -3, 1_000]", Loader=WhitelistYamlLoader)

        assert data == ["0x10", 16, -3, 1000]

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / "binary.json"
        path.write_bytes(b"\xff\xfe[]")

        with pytest.raises(WhitelistLoadError, match="Could not parse"):
            load_whitelist(path)

    def test_undecodable_yaml_file(self, tmp_path):
        path = tmp_path / "binary.yaml"
        path.write_bytes(b"\xff\xfe- [1, 2]")

        with pytest.raises(WhitelistLoadError):
            load_whitelist(path)

    def test_directory_path(self, tmp_path):
        path = tmp_path / "dir.json"
        path.mkdir()

        with pytest.raises(WhitelistLoadError, match="Could not read"):
            load_whitelist(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(WhitelistLoadError, match="not found"):
            load_whitelist(tmp_path / "nope.json")

    def test_unparsable_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("[[\"0x\", 1")

        with pytest.raises(WhitelistLoadError, match="Could not parse"):
            load_whitelist(path)

    def test_unparsable_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("whitelist: [unclosed")

        with pytest.raises(WhitelistLoadError, match="Could not parse"):
            load_whitelist(path)

    def test_accepts_str_path(self, tmp_path):
        path = tmp_path / "wl.json"
        path.write_text(json.dumps(REFERENCE_ENTRIES))

        assert len(load_whitelist(str(path))) == 3

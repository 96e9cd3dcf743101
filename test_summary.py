"""Tests for ROM size arithmetic, text summary and JSON export."""

import json

import pytest

from smbios_decoder.discovery.bios_information import BIOSInformation
from smbios_decoder.rendering.summary import (
    GB,
    MB,
    format_rom_size,
    rom_size_bytes,
    runtime_size_kb,
    summarize,
)
from smbios_decoder.rendering.export import to_dict, to_json


def _info(**overrides) -> BIOSInformation:
    fields = dict(
        handle=0x0000,
        length=0x1A,
        vendor="American Megatrends Inc.",
        version="1.2.3",
        starting_address_segment=0xE800,
        release_date="05/17/2023",
        rom_size=0xFF,
        characteristics=0x90,
        characteristics_ext1=0x03,
        characteristics_ext2=0x08,
        system_bios_major_release=5,
        system_bios_minor_release=17,
        ec_firmware_major_release=0xFF,
        ec_firmware_minor_release=0xFF,
        extended_rom_size=0x0010,
    )
    fields.update(overrides)
    return BIOSInformation(**fields)


# --- ROM size ---

@pytest.mark.parametrize("rom_size,expected", [
    (0x00, 65536),
    (0x10, 1_114_112),
    (0xFE, 65536 * 0xFF),
])
def test_legacy_rom_size(rom_size, expected):
    assert rom_size_bytes(_info(rom_size=rom_size)) == expected


def test_extended_rom_size_gigabytes():
    assert rom_size_bytes(_info(extended_rom_size=0x4010)) == 16 * 1_073_741_824


def test_extended_rom_size_megabytes():
    assert rom_size_bytes(_info(extended_rom_size=0x0100)) == 256 * MB


def test_extended_rom_size_fallback_when_absent():
    info = _info(length=0x18, extended_rom_size=None)
    assert rom_size_bytes(info) == 16_777_216


def test_extended_rom_size_zero_is_zero():
    assert rom_size_bytes(_info(extended_rom_size=0)) == 0


@pytest.mark.parametrize("ext,expected", [
    (0x8005, 5),
    (0xFFFF, 0x3FFF),
])
def test_reserved_units_count_bytes(ext, expected):
    assert rom_size_bytes(_info(extended_rom_size=ext)) == expected


def test_extended_size_ignored_without_sentinel():
    assert rom_size_bytes(_info(rom_size=0x0F, extended_rom_size=0x4010)) == 65536 * 16


@pytest.mark.parametrize("size,text", [
    (0, "0 bytes"),
    (1023, "1023 bytes"),
    (1024, "1 kB"),
    (65536, "64 kB"),
    (MB - 1, "1023 kB"),
    (MB, "1 MB"),
    (16 * MB, "16 MB"),
    (GB, "1 GB"),
    (16 * GB, "16 GB"),
])
def test_format_rom_size(size, text):
    assert format_rom_size(size) == text


def test_runtime_size():
    assert runtime_size_kb(0xE800) == 96
    assert runtime_size_kb(0xF000) == 64


# --- Summary ---

def test_summary_full():
    expected = "\n".join([
        "Handle 0x0000, DMI type 0, 26 bytes",
        "BIOS Information",
        "\tVendor: American Megatrends Inc.",
        "\tVersion: 1.2.3",
        "\tRelease Date: 05/17/2023",
        "\tAddress: 0xE8000",
        "\tRuntime Size: 96 kB",
        "\tROM Size: 16 MB",
        "\tCharacteristics:",
        "\t\tISA is supported",
        "\t\tPCI is supported",
        "\t\tACPI is supported",
        "\t\tUSB legacy is supported",
        "\t\tUEFI is supported",
        "\tBIOS Revision: 5.17",
    ])
    assert summarize(_info()) == expected


def test_summary_without_segment():
    text = summarize(_info(starting_address_segment=0))
    assert "Address:" not in text
    assert "Runtime Size:" not in text


def test_summary_empty_characteristics_keeps_header():
    text = summarize(_info(characteristics=0, characteristics_ext1=0, characteristics_ext2=0))
    lines = text.splitlines()
    assert lines[lines.index("\tCharacteristics:") + 1] == "\tBIOS Revision: 5.17"


def test_summary_absent_releases():
    """Length 15h structures carry no release fields at all."""
    info = _info(
        length=0x15,
        system_bios_major_release=None,
        system_bios_minor_release=None,
        ec_firmware_major_release=None,
        ec_firmware_minor_release=None,
        extended_rom_size=None,
    )
    text = summarize(info)
    assert "BIOS Revision" not in text
    assert "Firmware Revision" not in text


def test_summary_release_sentinel_suppressed():
    text = summarize(_info(length=0x16, system_bios_major_release=0xFF, extended_rom_size=None))
    assert "BIOS Revision" not in text


def test_summary_firmware_revision():
    text = summarize(_info(ec_firmware_major_release=1, ec_firmware_minor_release=9))
    assert text.endswith("\tBIOS Revision: 5.17\n\tFirmware Revision: 1.9")


# --- Export ---

def test_to_dict():
    out = to_dict(_info())
    assert out["handle"] == "0x0000"
    assert out["vendor"] == "American Megatrends Inc."
    assert out["starting_address_segment"] == "0xe800"
    assert out["runtime_size_kb"] == 96
    assert out["rom_size"] == {
        "raw": "0xff",
        "extended_raw": "0x0010",
        "bytes": 16 * MB,
        "display": "16 MB",
    }
    assert out["characteristics"]["flags"] == ["ISA is supported", "PCI is supported"]
    assert out["characteristics_ext2"]["flags"] == ["UEFI is supported"]
    assert out["bios_revision"] == "5.17"
    assert out["firmware_revision"] is None


def test_to_dict_absent_fields():
    out = to_dict(_info(starting_address_segment=0, extended_rom_size=None,
                        system_bios_major_release=None, system_bios_minor_release=None))
    assert out["starting_address_segment"] is None
    assert out["runtime_size_kb"] is None
    assert out["rom_size"]["extended_raw"] is None
    assert out["bios_revision"] is None


def test_to_json_round_trips_through_json():
    assert json.loads(to_json(_info())) == to_dict(_info())

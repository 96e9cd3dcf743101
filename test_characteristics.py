"""Tests for BIOS characteristics flag rendering."""

from smbios_decoder.discovery.characteristics import (
    BIOS_CHARACTERISTICS,
    render_characteristics,
    render_characteristics_ext1,
    render_characteristics_ext2,
    render_flags,
)


def test_isa_and_pci():
    assert render_characteristics((1 << 7) | (1 << 4)) == [
        "ISA is supported",
        "PCI is supported",
    ]


def test_empty_vector():
    assert render_characteristics(0) == []
    assert render_characteristics_ext1(0) == []
    assert render_characteristics_ext2(0) == []


def test_vendor_reserved_bits_ignored():
    """Bits 32-63 belong to the BIOS and system vendors."""
    assert render_characteristics((1 << 32) | (1 << 48) | (1 << 63)) == []
    assert render_characteristics((1 << 63) | (1 << 19)) == ["EDD is supported"]


def test_all_primary_bits():
    lines = render_characteristics(0xFFFF_FFFF)
    assert len(lines) == 32
    assert lines[:3] == ["Reserved", "Reserved", "Unknown"]
    assert lines[-1] == "NEC PC-98"


def test_ext1_order():
    assert render_characteristics_ext1(0xFF) == [
        "ACPI is supported",
        "USB legacy is supported",
        "AGP is supported",
        "I2O boot is supported",
        "LS-120 boot is supported",
        "ATAPI Zip drive boot is supported",
        "IEEE 1394 boot is supported",
        "Smart battery is supported",
    ]


def test_ext2_reserved_bits_ignored():
    assert render_characteristics_ext2(0xE0) == []
    assert render_characteristics_ext2(0xFF) == [
        "BIOS boot specification is supported",
        "Function key-initiated network boot is supported",
        "Targeted content distribution is supported",
        "UEFI is supported",
        "System is a virtual machine",
    ]


def test_render_flags_orders_by_bit_not_table_order():
    table = {7: "high", 0: "low", 3: "middle"}
    assert render_flags(0x89, table) == ["low", "middle", "high"]


def test_render_flags_is_stable():
    value = 0x0BF8_9A90
    assert render_flags(value, BIOS_CHARACTERISTICS) == render_flags(value, BIOS_CHARACTERISTICS)

"""BIOS characteristics bit vectors of the BIOS Information structure.

Descriptions per DSP0134 7.1.1 (characteristics), 7.1.2.1 (extension
byte 1) and 7.1.2.2 (extension byte 2). Bits not listed here are reserved
(or, for bits 32-63 of the primary vector, reserved for the BIOS and system
vendors) and are never reported.
"""

from typing import Dict, List


# BIOS Characteristics, DSP0134 Table 7 (QWORD at offset 0Ah)
BIOS_CHARACTERISTICS = {
    0: "Reserved",
    1: "Reserved",
    2: "Unknown",
    3: "BIOS characteristics not supported",
    4: "ISA is supported",
    5: "MCA is supported",
    6: "EISA is supported",
    7: "PCI is supported",
    8: "PC Card (PCMCIA) is supported",
    9: "PNP is supported",
    10: "APM is supported",
    11: "BIOS is upgradeable",
    12: "BIOS shadowing is allowed",
    13: "VLB is supported",
    14: "ESCD support is available",
    15: "Boot from CD is supported",
    16: "Selectable boot is supported",
    17: "BIOS ROM is socketed",
    18: "Boot from PC Card (PCMCIA) is supported",
    19: "EDD is supported",
    20: "Japanese floppy for NEC 9800 1.2 MB is supported (int 13h)",
    21: "Japanese floppy for Toshiba 1.2 MB is supported (int 13h)",
    22: "5.25\"/360 kB floppy services are supported (int 13h)",
    23: "5.25\"/1.2 MB floppy services are supported (int 13h)",
    24: "3.5\"/720 kB floppy services are supported (int 13h)",
    25: "3.5\"/2.88 MB floppy services are supported (int 13h)",
    26: "Print screen service is supported (int 5h)",
    27: "8042 keyboard services are supported (int 9h)",
    28: "Serial services are supported (int 14h)",
    29: "Printer services are supported (int 17h)",
    30: "CGA/mono video services are supported (int 10h)",
    31: "NEC PC-98",
}

# BIOS Characteristics Extension Byte 1, DSP0134 Table 8 (offset 12h)
BIOS_CHARACTERISTICS_EXT1 = {
    0: "ACPI is supported",
    1: "USB legacy is supported",
    2: "AGP is supported",
    3: "I2O boot is supported",
    4: "LS-120 boot is supported",
    5: "ATAPI Zip drive boot is supported",
    6: "IEEE 1394 boot is supported",
    7: "Smart battery is supported",
}

# BIOS Characteristics Extension Byte 2, DSP0134 Table 9 (offset 13h)
BIOS_CHARACTERISTICS_EXT2 = {
    0: "BIOS boot specification is supported",
    1: "Function key-initiated network boot is supported",
    2: "Targeted content distribution is supported",
    3: "UEFI is supported",
    4: "System is a virtual machine",
}

VECTORS = {
    "primary": BIOS_CHARACTERISTICS,
    "ext1": BIOS_CHARACTERISTICS_EXT1,
    "ext2": BIOS_CHARACTERISTICS_EXT2,
}


def render_flags(value: int, table: Dict[int, str]) -> List[str]:
    """Return the descriptions of the bits set in ``value``.

    Only bits present in ``table`` are tested. Output runs from bit 0 upward.
    """
    return [table[bit] for bit in sorted(table) if value & (1 << bit)]


def render_characteristics(value: int) -> List[str]:
    return render_flags(value, BIOS_CHARACTERISTICS)


def render_characteristics_ext1(value: int) -> List[str]:
    return render_flags(value, BIOS_CHARACTERISTICS_EXT1)


def render_characteristics_ext2(value: int) -> List[str]:
    return render_flags(value, BIOS_CHARACTERISTICS_EXT2)

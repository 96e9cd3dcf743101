"""SMBIOS structure table reader.

Splits a raw DMI table (as exported in /sys/firmware/dmi/tables/DMI or by
``dmidecode --dump-bin``) into individual structures per DSP0134 6.1.2:
a 4-byte header, the formatted area, then a string set terminated by a
double NUL.
"""

import struct
import logging
from typing import Iterator, List, Optional, Tuple
from dataclasses import dataclass


logger = logging.getLogger(__name__)

SMBIOS_HEADER_FMT = '<BBH'
SMBIOS_HEADER_SIZE = 4

END_OF_TABLE_TYPE = 127

BAD_INDEX = "<BAD INDEX>"

# Structure types per DSP0134 7.0 - 7.46
TABLE_TYPES = {
    0: "BIOS Information",
    1: "System Information",
    2: "Baseboard (or Module) Information",
    3: "System Enclosure or Chassis",
    4: "Processor Information",
    5: "Memory Controller Information (Obsolete)",
    6: "Memory Module Information (Obsolete)",
    7: "Cache Information",
    8: "Port Connector Information",
    9: "System Slots",
    10: "On Board Devices Information (Obsolete)",
    11: "OEM Strings",
    12: "System Configuration Options",
    13: "BIOS Language Information",
    14: "Group Associations",
    15: "System Event Log",
    16: "Physical Memory Array",
    17: "Memory Device",
    18: "32-Bit Memory Error Information",
    19: "Memory Array Mapped Address",
    20: "Memory Device Mapped Address",
    21: "Built-in Pointing Device",
    22: "Portable Battery",
    23: "System Reset",
    24: "Hardware Security",
    25: "System Power Controls",
    26: "Voltage Probe",
    27: "Cooling Device",
    28: "Temperature Probe",
    29: "Electrical Current Probe",
    30: "Out-of-Band Remote Access",
    31: "Boot Integrity Services (BIS) Entry Point",
    32: "System Boot Information",
    33: "64-Bit Memory Error Information",
    34: "Management Device",
    35: "Management Device Component",
    36: "Management Device Threshold Data",
    37: "Memory Channel",
    38: "IPMI Device Information",
    39: "System Power Supply",
    40: "Additional Information",
    41: "Onboard Devices Extended Information",
    42: "Management Controller Host Interface",
    43: "TPM Device",
    44: "Processor Additional Information",
    45: "Firmware Inventory Information",
    46: "String Property",
    126: "Inactive",
    127: "End-of-Table",
}


class TableFormatError(ValueError):
    """Raised when the raw table cannot be split into structures."""


def table_type_name(table_type: int) -> str:
    """Return the DSP0134 name for a structure type."""
    if table_type in TABLE_TYPES:
        return TABLE_TYPES[table_type]
    if table_type >= 128:
        return f"OEM-specific Type {table_type}"
    return f"Unknown Type {table_type}"


@dataclass(frozen=True)
class SMBIOSHeader:
    """Common 4-byte structure header."""
    type: int
    length: int
    handle: int

    @classmethod
    def from_bytes(cls, data: bytes, offset: int = 0) -> "SMBIOSHeader":
        """Parse a structure header at ``offset``."""
        if len(data) - offset < SMBIOS_HEADER_SIZE:
            raise TableFormatError(
                f"SMBIOS data too short for header: {len(data) - offset} bytes at offset {offset}"
            )
        table_type, length, handle = struct.unpack_from(SMBIOS_HEADER_FMT, data, offset)
        return cls(type=table_type, length=length, handle=handle)

    def __str__(self) -> str:
        return (
            f"Handle 0x{self.handle:04X}, DMI type {self.type}, {self.length} bytes\n"
            f"{table_type_name(self.type)}"
        )


@dataclass(frozen=True)
class RawTable:
    """One SMBIOS structure as handed over by the table source.

    ``data`` is the formatted area including the header, so field offsets
    match the DSP0134 tables directly. ``strings`` is the structure's
    string set in order (string number 1 is ``strings[0]``).
    """
    header: SMBIOSHeader
    data: bytes
    strings: Tuple[str, ...] = ()

    @classmethod
    def from_bytes(cls, data: bytes, strings: Tuple[str, ...] = ()) -> "RawTable":
        """Build a table from its formatted area (header included)."""
        return cls(header=SMBIOSHeader.from_bytes(data), data=bytes(data), strings=tuple(strings))

    @property
    def type(self) -> int:
        return self.header.type

    @property
    def length(self) -> int:
        return self.header.length

    @property
    def handle(self) -> int:
        return self.header.handle

    def resolve_string(self, index: int) -> str:
        """Turn a string number into text; 0 means no string."""
        if index == 0:
            return ""
        if 0 < index <= len(self.strings):
            return self.strings[index - 1]
        logger.warning(
            "Handle 0x%04X: string index %d out of range (%d strings)",
            self.handle, index, len(self.strings),
        )
        return BAD_INDEX

    def string_at(self, offset: int) -> str:
        """Resolve the string whose number is stored at ``offset``."""
        return self.resolve_string(self.data[offset])


def _read_strings(blob: bytes, start: int) -> Tuple[List[str], int]:
    """Parse the string set at ``start``; return (strings, next_offset)."""
    if blob[start:start + 2] == b"\x00\x00":
        return [], start + 2

    strings: List[str] = []
    offset = start
    while True:
        try:
            end = blob.index(b"\x00", offset)
        except ValueError:
            raise TableFormatError(f"Unterminated string set starting at offset {start}")
        if end == offset:
            return strings, end + 1
        strings.append(blob[offset:end].decode("utf-8", errors="replace"))
        offset = end + 1


def iter_tables(blob: bytes) -> Iterator[RawTable]:
    """Yield every structure in a raw DMI table.

    Stops after the End-of-Table structure (type 127) or when fewer than a
    header's worth of bytes remain.
    """
    offset = 0
    while len(blob) - offset >= SMBIOS_HEADER_SIZE:
        header = SMBIOSHeader.from_bytes(blob, offset)
        if header.length < SMBIOS_HEADER_SIZE:
            raise TableFormatError(
                f"Structure at offset {offset} declares invalid length {header.length}"
            )
        end = offset + header.length
        if end > len(blob):
            raise TableFormatError(
                f"Structure at offset {offset} ({header.length} bytes) runs past end of table"
            )

        strings, next_offset = _read_strings(blob, end)
        logger.debug(
            "Structure at 0x%04x: handle 0x%04X type %d length %d strings %d",
            offset, header.handle, header.type, header.length, len(strings),
        )
        yield RawTable(header=header, data=bytes(blob[offset:end]), strings=tuple(strings))

        if header.type == END_OF_TABLE_TYPE:
            return
        offset = next_offset


def read_tables(blob: bytes) -> List[RawTable]:
    """Return all structures of a raw DMI table."""
    return list(iter_tables(blob))


def find_tables(blob: bytes, table_type: Optional[int] = None) -> List[RawTable]:
    """Return the structures of ``table_type`` (all structures if None)."""
    return [t for t in iter_tables(blob) if table_type is None or t.type == table_type]

"""BIOS Information (Type 0) structure decoder per DSP0134 7.1.

Fields appended by later SMBIOS revisions are only read when the declared
structure length covers them:

    2.0+  offsets 00h-11h (minimum length 12h)
    2.4+  characteristics extension bytes, system BIOS and EC firmware release
    3.1+  extended BIOS ROM size (length 1Ah)

Optional fields that the structure is too short to hold are set to None
(or 0 for the extension bytes) instead of being read.
"""

import struct
import logging
from typing import Iterable, List, Optional
from dataclasses import dataclass

from smbios_decoder.discovery.table_reader import RawTable


logger = logging.getLogger(__name__)

BIOS_INFORMATION_TYPE = 0

MIN_LENGTH = 0x12
SYSTEM_BIOS_RELEASE_LENGTH = 0x16
EC_FIRMWARE_RELEASE_LENGTH = 0x18
EXTENDED_ROM_SIZE_LENGTH = 0x1A

ROM_SIZE_EXTENDED = 0xFF
RELEASE_NOT_SUPPORTED = 0xFF


class DecodeError(ValueError):
    """Base class for BIOS Information decoding failures."""


class WrongTypeError(DecodeError):
    """The structure is not a BIOS Information structure."""

    def __init__(self, table_type: int):
        self.table_type = table_type
        super().__init__(
            f"Invalid table type {table_type}, expected {BIOS_INFORMATION_TYPE} (BIOS Information)"
        )


class TruncatedRecordError(DecodeError):
    """The structure is too short for its required fields to be trusted."""

    def __init__(self, length: int, available: Optional[int] = None):
        self.length = length
        self.available = available
        if available is not None and available < length:
            message = f"Structure declares {length} bytes but only {available} are present"
        else:
            message = f"Required fields missing: length 0x{length:02x} < 0x{MIN_LENGTH:02x}"
        super().__init__(message)


@dataclass(frozen=True)
class BIOSInformation:
    """Decoded BIOS Information structure. Comments give the field offset."""
    handle: int
    length: int
    vendor: str                                         # 04h
    version: str                                        # 05h
    starting_address_segment: int                       # 06h, 0 = not applicable
    release_date: str                                   # 08h
    rom_size: int                                       # 09h, FFh = see extended size
    characteristics: int                                # 0Ah
    characteristics_ext1: int = 0                       # 12h
    characteristics_ext2: int = 0                       # 13h
    system_bios_major_release: Optional[int] = None     # 14h
    system_bios_minor_release: Optional[int] = None     # 15h
    ec_firmware_major_release: Optional[int] = None     # 16h
    ec_firmware_minor_release: Optional[int] = None     # 17h
    extended_rom_size: Optional[int] = None             # 18h

    @property
    def has_system_bios_release(self) -> bool:
        return (
            self.system_bios_major_release is not None
            and self.system_bios_major_release != RELEASE_NOT_SUPPORTED
        )

    @property
    def has_ec_firmware_release(self) -> bool:
        return (
            self.ec_firmware_major_release is not None
            and self.ec_firmware_major_release != RELEASE_NOT_SUPPORTED
        )


def decode(raw: RawTable) -> BIOSInformation:
    """Decode a raw Type 0 structure.

    Raises:
        WrongTypeError: the structure type is not 0.
        TruncatedRecordError: the declared length is below 12h, or the
            formatted area holds fewer bytes than declared.
    """
    if raw.type != BIOS_INFORMATION_TYPE:
        raise WrongTypeError(raw.type)
    length = raw.length
    if length < MIN_LENGTH:
        raise TruncatedRecordError(length)
    data = raw.data
    if len(data) < length:
        raise TruncatedRecordError(length, len(data))

    starting_address_segment = struct.unpack_from('<H', data, 0x06)[0]
    characteristics = struct.unpack_from('<Q', data, 0x0A)[0]

    # 2.4+ fields; the release numbers come in pairs
    ext1 = data[0x12] if length > 0x12 else 0
    ext2 = data[0x13] if length > 0x13 else 0
    bios_major = bios_minor = None
    if length >= SYSTEM_BIOS_RELEASE_LENGTH:
        bios_major, bios_minor = data[0x14], data[0x15]
    ec_major = ec_minor = None
    if length >= EC_FIRMWARE_RELEASE_LENGTH:
        ec_major, ec_minor = data[0x16], data[0x17]

    extended_rom_size = None
    if length >= EXTENDED_ROM_SIZE_LENGTH:
        extended_rom_size = struct.unpack_from('<H', data, 0x18)[0]

    info = BIOSInformation(
        handle=raw.handle,
        length=length,
        vendor=raw.string_at(0x04),
        version=raw.string_at(0x05),
        starting_address_segment=starting_address_segment,
        release_date=raw.string_at(0x08),
        rom_size=data[0x09],
        characteristics=characteristics,
        characteristics_ext1=ext1,
        characteristics_ext2=ext2,
        system_bios_major_release=bios_major,
        system_bios_minor_release=bios_minor,
        ec_firmware_major_release=ec_major,
        ec_firmware_minor_release=ec_minor,
        extended_rom_size=extended_rom_size,
    )
    logger.debug(
        "Decoded BIOS Information handle 0x%04X (length 0x%02x, extended ROM size %s)",
        info.handle, length, "present" if extended_rom_size is not None else "absent",
    )
    return info


def decode_all(tables: Iterable[RawTable]) -> List[BIOSInformation]:
    """Decode every BIOS Information structure in ``tables``, skipping other types."""
    return [decode(t) for t in tables if t.type == BIOS_INFORMATION_TYPE]

"""Text summary of a decoded BIOS Information structure.

The layout follows dmidecode: a header line, then tab-indented fields.
Nothing here looks at the structure length; optional fields the decoder
could not read are None.
"""

from typing import List

from smbios_decoder.discovery.bios_information import (
    BIOS_INFORMATION_TYPE,
    ROM_SIZE_EXTENDED,
    BIOSInformation,
)
from smbios_decoder.discovery.characteristics import (
    render_characteristics,
    render_characteristics_ext1,
    render_characteristics_ext2,
)
from smbios_decoder.discovery.table_reader import SMBIOSHeader


KB = 1024
MB = 1024 * 1024
GB = 1024 * 1024 * 1024

# Pre-3.1 structures using the FFh sentinel carry no extended size; 16 MB
EXTENDED_ROM_SIZE_FALLBACK = 0x10

# Extended BIOS ROM Size, bits 15:14
ROM_SIZE_UNITS = {
    0: MB,
    1: GB,
}


def rom_size_bytes(info: BIOSInformation) -> int:
    """Return the BIOS ROM size in bytes.

    Reserved unit codes in the extended size count the magnitude in bytes.
    """
    if info.rom_size != ROM_SIZE_EXTENDED:
        return 65536 * (info.rom_size + 1)

    ext_size = info.extended_rom_size
    if ext_size is None:
        ext_size = EXTENDED_ROM_SIZE_FALLBACK
    unit = ext_size >> 14
    multiplier = ROM_SIZE_UNITS.get(unit, 1)
    return (ext_size & 0x3FFF) * multiplier


def runtime_size_kb(segment: int) -> int:
    """Size of the runtime image between ``segment``:0000 and the 1 MB boundary."""
    return ((0x10000 - segment) << 4) // 1024


def format_rom_size(size: int) -> str:
    """Scale a byte count to the largest binary unit that keeps it >= 1."""
    if size < KB:
        return f"{size} bytes"
    if size < MB:
        return f"{size // KB} kB"
    if size < GB:
        return f"{size // MB} MB"
    return f"{size // GB} GB"


def characteristics_lines(info: BIOSInformation) -> List[str]:
    """Rendered descriptions of all three vectors, primary first."""
    return (
        render_characteristics(info.characteristics)
        + render_characteristics_ext1(info.characteristics_ext1)
        + render_characteristics_ext2(info.characteristics_ext2)
    )


def summarize(info: BIOSInformation) -> str:
    header = SMBIOSHeader(type=BIOS_INFORMATION_TYPE, length=info.length, handle=info.handle)
    lines = [
        str(header),
        f"\tVendor: {info.vendor}",
        f"\tVersion: {info.version}",
        f"\tRelease Date: {info.release_date}",
    ]
    if info.starting_address_segment != 0:
        lines += [
            f"\tAddress: 0x{info.starting_address_segment:04X}0",
            f"\tRuntime Size: {runtime_size_kb(info.starting_address_segment)} kB",
        ]
    lines.append(f"\tROM Size: {format_rom_size(rom_size_bytes(info))}")
    lines.append("\tCharacteristics:")
    lines += [f"\t\t{text}" for text in characteristics_lines(info)]
    if info.has_system_bios_release:
        lines.append(
            f"\tBIOS Revision: {info.system_bios_major_release}.{info.system_bios_minor_release}"
        )
    if info.has_ec_firmware_release:
        lines.append(
            f"\tFirmware Revision: {info.ec_firmware_major_release}.{info.ec_firmware_minor_release}"
        )
    return "\n".join(lines)

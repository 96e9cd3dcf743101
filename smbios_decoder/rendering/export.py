"""Structured (JSON) export of a decoded BIOS Information structure."""

import json
from typing import Any, Dict, Optional

from smbios_decoder.discovery.bios_information import BIOSInformation
from smbios_decoder.discovery.characteristics import (
    render_characteristics,
    render_characteristics_ext1,
    render_characteristics_ext2,
)
from smbios_decoder.rendering.summary import format_rom_size, rom_size_bytes, runtime_size_kb


def _release(present: bool, major: Optional[int], minor: Optional[int]) -> Optional[str]:
    return f"{major}.{minor}" if present else None


def to_dict(info: BIOSInformation) -> Dict[str, Any]:
    """Return a JSON-serializable dictionary for ``info``."""
    segment = info.starting_address_segment
    size = rom_size_bytes(info)
    return {
        "handle": f"0x{info.handle:04x}",
        "length": info.length,
        "vendor": info.vendor,
        "version": info.version,
        "release_date": info.release_date,
        "starting_address_segment": f"0x{segment:04x}" if segment else None,
        "runtime_size_kb": runtime_size_kb(segment) if segment else None,
        "rom_size": {
            "raw": f"0x{info.rom_size:02x}",
            "extended_raw": (
                f"0x{info.extended_rom_size:04x}" if info.extended_rom_size is not None else None
            ),
            "bytes": size,
            "display": format_rom_size(size),
        },
        "characteristics": {
            "raw": f"0x{info.characteristics:016x}",
            "flags": render_characteristics(info.characteristics),
        },
        "characteristics_ext1": {
            "raw": f"0x{info.characteristics_ext1:02x}",
            "flags": render_characteristics_ext1(info.characteristics_ext1),
        },
        "characteristics_ext2": {
            "raw": f"0x{info.characteristics_ext2:02x}",
            "flags": render_characteristics_ext2(info.characteristics_ext2),
        },
        "bios_revision": _release(
            info.has_system_bios_release,
            info.system_bios_major_release,
            info.system_bios_minor_release,
        ),
        "firmware_revision": _release(
            info.has_ec_firmware_release,
            info.ec_firmware_major_release,
            info.ec_firmware_minor_release,
        ),
    }


def to_json(info: BIOSInformation) -> str:
    return json.dumps(to_dict(info), indent=2)

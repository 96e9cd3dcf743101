"""Text and JSON rendering of decoded structures."""

from smbios_decoder.rendering.summary import rom_size_bytes, summarize
from smbios_decoder.rendering.export import to_dict, to_json

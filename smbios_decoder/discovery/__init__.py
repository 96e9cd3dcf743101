"""Structure discovery and decoding for raw SMBIOS tables."""

from smbios_decoder.discovery.table_reader import (
    RawTable,
    SMBIOSHeader,
    TableFormatError,
    find_tables,
    iter_tables,
    read_tables,
)
from smbios_decoder.discovery.bios_information import (
    BIOSInformation,
    DecodeError,
    TruncatedRecordError,
    WrongTypeError,
    decode,
    decode_all,
)

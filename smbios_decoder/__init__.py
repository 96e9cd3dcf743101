"""SMBIOS BIOS Information (Type 0) decoder."""

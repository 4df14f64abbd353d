"""Layout geometry, a widget tree, text helpers, and font, ELF, ACPI, EFI and handover readers."""

__version__ = "0.1.0"
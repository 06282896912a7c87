from .report_md import REQUIRED_SECTIONS, generate_archetype_report  # noqa: F401

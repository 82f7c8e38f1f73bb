from shootbudget.core.reporting.api import (
    generate_comparison_excel,
    generate_version_csv,
    generate_version_excel,
)

__all__ = [
    "generate_version_excel",
    "generate_version_csv",
    "generate_comparison_excel",
]

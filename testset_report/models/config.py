"""Configuration for flattening and exit status."""

from pydantic import Field

from testset_report.models.base import Model


class ReportConfig(Model):
    """Settings shared by the flattener, the session and the CLI."""

    top_level_description: str = Field(
        default="Top level tests",
        description="Name of the group collecting outcomes recorded on the root",
    )
    separator: str = Field(
        default="/", description="Joins ancestor descriptions of flattened groups"
    )
    # Insertion order otherwise; sorting makes conflict warnings reproducible
    sort_property_keys: bool = False
    success_exit_code: int = 0
    failure_exit_code: int = 1

from .allure_utils import (
    AllureReportProcessor,
    TestResultSummary,
    attach_file,
    attach_json,
    attach_png,
    attach_text,
)

__all__ = [
    "AllureReportProcessor",
    "TestResultSummary",
    "attach_file",
    "attach_json",
    "attach_png",
    "attach_text",
]

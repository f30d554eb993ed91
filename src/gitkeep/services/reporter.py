# File: src/gitkeep/services/reporter.py

import logging
from datetime import datetime, timezone
from typing import List
from pydantic import BaseModel, ConfigDict, Field
from ..domain import Config, Mode, Summary

logger = logging.getLogger("gitkeep")


class ReportConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    root: str
    dry_run: bool = Field(alias="dryRun")
    clean: bool
    check: bool
    gitkeep_name: str = Field(alias="gitkeepName")


class ReportCounts(BaseModel):
    created: int
    removed: int
    skipped: int
    errors: int


class ReportDetails(BaseModel):
    created: List[str] = Field(default_factory=list)
    removed: List[str] = Field(default_factory=list)
    skipped: List[str] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)
    mismatched: List[str] = Field(default_factory=list, description="Directories flagged by check mode")


class Report(BaseModel):
    timestamp: str = Field(description="ISO-8601 time the report was built")
    config: ReportConfig
    summary: ReportCounts
    details: ReportDetails

    @classmethod
    def from_summary(cls, summary: Summary, config: Config) -> "Report":
        return cls(
            timestamp=datetime.now(timezone.utc).isoformat(),
            config=ReportConfig(
                root=str(config.root),
                dry_run=config.dry_run,
                clean=config.mode is Mode.CLEAN,
                check=config.mode is Mode.CHECK,
                gitkeep_name=config.marker_name,
            ),
            summary=ReportCounts(
                created=len(summary.created),
                removed=len(summary.removed),
                skipped=len(summary.skipped),
                errors=len(summary.errors),
            ),
            details=ReportDetails(
                created=list(summary.created),
                removed=list(summary.removed),
                skipped=list(summary.skipped),
                errors=list(summary.errors),
                mismatched=list(summary.mismatched),
            ),
        )


def save_report(summary: Summary, config: Config, report_path: str) -> bool:
    report = Report.from_summary(summary, config)
    try:
        with open(report_path, "w", encoding="utf-8") as f:
            f.write(report.model_dump_json(indent=2, by_alias=True))
    except OSError as e:
        logger.warning(f"Failed to write report: {e}")
        return False

    logger.info(f"Report saved to {report_path}")
    return True


def print_summary(summary: Summary, config: Config):
    name = config.marker_name
    line = "=" * 60

    print(f"\n\033[96m{line}\033[0m")
    print("\033[96mSUMMARY\033[0m")
    print(f"\033[96m{line}\033[0m\n")

    if config.mode is Mode.CLEAN:
        print(f"\033[91mRemoved {name}: {len(summary.removed)}\033[0m")
    elif config.mode is Mode.CHECK:
        print("\033[94mCheck mode - no changes made\033[0m")
        print(f"\033[94mMismatched directories: {len(summary.mismatched)}\033[0m")
    else:
        print(f"\033[92mCreated {name}: {len(summary.created)}\033[0m")
        print(f"\033[91mRemoved {name}: {len(summary.removed)}\033[0m")

    print(f"\033[90mSkipped directories: {len(summary.skipped)}\033[0m")

    if summary.errors:
        print(f"\033[91mErrors: {len(summary.errors)}\033[0m")

    if config.dry_run:
        print("\n\033[93mDry run - no files were changed\033[0m")

    print(f"\n\033[96m{line}\033[0m\n")

from abc import ABC, abstractmethod
from pathlib import Path

from validate_pipelines.domain_model.results import JobResult, PipelineTestResult


class OutputFormatter(ABC):
    """Interface for formatting CLI output."""

    @abstractmethod
    def format_file_header(self, file: Path) -> str:
        """Format header for a file being validated."""
        pass

    @abstractmethod
    def format_error(self, message: str) -> str:
        pass

    @abstractmethod
    def format_warning(self, message: str) -> str:
        pass

    @abstractmethod
    def format_no_problems(self) -> str:
        """Format message when no problems found."""
        pass

    @abstractmethod
    def format_summary(self, total_errors: int, total_warnings: int) -> str:
        """Format final summary of all validation results."""
        pass

    @abstractmethod
    def format_job_result(self, name: str, result: JobResult) -> str:
        """Format the outcome of one executed job."""
        pass

    @abstractmethod
    def format_pipeline_summary(self, result: PipelineTestResult) -> str:
        """Format the closing line of a pipeline run."""
        pass


class ColoredFormatter(OutputFormatter):
    """
    Colored console output formatter.

    Formats CLI output with ANSI color codes and consistent spacing.
    Used as the default formatter for interactive terminal sessions.
    """

    STYLE = {
        "ok": {"color_bold": "\033[1;92m", "color": "\033[92m", "sign": "✓"},
        "error": {"color_bold": "\033[1;31m", "color": "\033[31m", "sign": "✗"},
        "warning": {"color_bold": "\033[1;33m", "color": "\033[33m", "sign": "⚠"},
    }

    DEF_STYLE = {
        "format_end": "\033[0m",
        "neutral": "\033[2m",
        "underline": "\033[4m",
    }

    def format_file_header(self, file: Path) -> str:
        """Format file header with underline."""
        return f'\n{self.DEF_STYLE["underline"]}{file}{self.DEF_STYLE["format_end"]}'

    def format_error(self, message: str) -> str:
        return self._format_line("error", message)

    def format_warning(self, message: str) -> str:
        return self._format_line("warning", message)

    def format_no_problems(self) -> str:
        """Format success message when no problems found."""
        return (
            f'  {self.DEF_STYLE["neutral"]}{self.STYLE["ok"]["sign"]} '
            f'All checks passed{self.DEF_STYLE["format_end"]}'
        )

    def format_summary(self, total_errors: int, total_warnings: int) -> str:
        """Format colored summary with counts."""
        style = self.STYLE[self._level(total_errors, total_warnings)]
        total_problems = total_errors + total_warnings

        return (
            f'\n{style["color_bold"]}{style["sign"]} {total_problems} problems '
            f'({total_errors} errors, {total_warnings} warnings){self.DEF_STYLE["format_end"]}\n'
        )

    def format_job_result(self, name: str, result: JobResult) -> str:
        style = self.STYLE["ok" if result.success else "error"]
        line = f'  {style["color"]}{style["sign"]}{self.DEF_STYLE["format_end"]} {name}'
        line += max(32 - len(line), 0) * " "
        line += f'{self.DEF_STYLE["neutral"]}{result.duration}ms{self.DEF_STYLE["format_end"]}'
        if result.error:
            line += f'  {result.error}'
        return line

    def format_pipeline_summary(self, result: PipelineTestResult) -> str:
        failed = sum(1 for r in result.jobs.values() if not r.success)
        style = self.STYLE["error" if failed else "ok"]
        return (
            f'\n{style["color_bold"]}{style["sign"]} {len(result.jobs)} jobs '
            f'({failed} failed) in {result.total_duration}ms{self.DEF_STYLE["format_end"]}\n'
        )

    def _format_line(self, level: str, message: str) -> str:
        style = self.STYLE[level]
        line = f'  {style["color"]}{level}{self.DEF_STYLE["format_end"]}'
        line += max(20 - len(line), 0) * " "
        return line + message

    @staticmethod
    def _level(total_errors: int, total_warnings: int) -> str:
        if total_errors:
            return "error"
        if total_warnings:
            return "warning"
        return "ok"

"""Report generators."""

from mockexam.adapters.reporters.json import JsonReporter
from mockexam.adapters.reporters.markdown import MarkdownReporter

__all__ = ["JsonReporter", "MarkdownReporter"]

"""Export layer — static mirror generation.

Crawls the running dynamic site once per locale and writes the rendered
pages, the static assets and a root redirect as a plain file tree.
"""

from prowl.export.static import ExportResult, StaticExporter
from prowl.export.targets import ExportTarget
from prowl.export.writer import ExportedFile

__all__ = ["ExportResult", "ExportTarget", "ExportedFile", "StaticExporter"]

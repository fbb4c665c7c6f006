from .renderers import ExportFormat, ExportPayload, parse_export_format, render_export

__all__ = ["ExportFormat", "ExportPayload", "parse_export_format", "render_export"]

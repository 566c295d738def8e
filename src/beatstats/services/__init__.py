from beatstats.services.assets import AssetLocator
from beatstats.services.dashboard import DashboardService
from beatstats.services.exporter import CsvExporter, to_delimited_text

__all__ = ["AssetLocator", "CsvExporter", "DashboardService", "to_delimited_text"]

from .csv_connector import CSVConnector  # noqa

__all__ = ["CSVConnector"]

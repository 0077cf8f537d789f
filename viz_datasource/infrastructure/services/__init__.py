"""Infrastructure service implementations."""

from .csv_parsing import CsvDatasourceParser

__all__ = ['CsvDatasourceParser']

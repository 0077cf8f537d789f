from .parser import CsvDatasourceParser
from .type_inference import convert_value, infer_column_type

__all__ = ['CsvDatasourceParser', 'convert_value', 'infer_column_type']

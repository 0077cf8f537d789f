from .delete_datasource import DeleteDatasourceHandler
from .query_datasources import (
    GetDatasourceDataHandler,
    GetDatasourceHeadersHandler,
    ListDatasourcesHandler,
)
from .upload_datasource import UploadDatasourceHandler
from .upload_guard import UploadGuard

__all__ = [
    'DeleteDatasourceHandler',
    'GetDatasourceDataHandler',
    'GetDatasourceHeadersHandler',
    'ListDatasourcesHandler',
    'UploadDatasourceHandler',
    'UploadGuard',
]

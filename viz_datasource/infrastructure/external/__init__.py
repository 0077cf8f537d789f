from .local_file_storage import LocalUploadedFileStore

__all__ = ['LocalUploadedFileStore']

"""Shared constants."""

HTTP_STATUS_CREATED = 201
HTTP_STATUS_BAD_REQUEST = 400
HTTP_STATUS_NOT_FOUND = 404
HTTP_STATUS_CONFLICT = 409
HTTP_STATUS_INTERNAL_SERVER_ERROR = 500

INTERNAL_SERVER_ERROR_MESSAGE = "Internal server error"

# Message fragments used to recover a status code from an untyped exception.
NOT_FOUND_MARKER = "not found"
ALREADY_EXISTS_MARKER = "already exists"
VALIDATION_MARKER = "validation"

FOLDER_NOT_FOUND = "Folder not found"
PARENT_FOLDER_NOT_FOUND = "Parent folder not found"
FILE_NOT_FOUND = "File not found"
FOLDER_PATH_EXISTS = "Folder with this path already exists"
FILE_PATH_EXISTS = "File with this path already exists"
FOLDER_NOT_EMPTY = "Cannot delete folder with subfolders or files"

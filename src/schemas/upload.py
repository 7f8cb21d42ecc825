# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Upload endpoint schemas."""

import datetime

from src.schemas.common import CamelModel


class UploadedFileResponse(CamelModel):
    filename: str
    original_name: str | None
    size: int
    mimetype: str | None
    url: str


class UploadedFilesResponse(CamelModel):
    files: list[UploadedFileResponse]
    count: int


class FileInfoResponse(CamelModel):
    filename: str
    size: int
    created: datetime.datetime
    modified: datetime.datetime
    url: str

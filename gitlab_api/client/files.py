"""File upload client mixin."""

import base64
import binascii
import logging
import os
from typing import cast

from gitlab_api.client.base import BaseClientMixin
from gitlab_api.errors import ConfigurationError
from gitlab_api.http import Single
from gitlab_api.models import FileFromPath, FileSource, Upload

logger = logging.getLogger(__name__)


class FilesMixin(BaseClientMixin):
    """Mixin for file operations."""

    def upload_file(self, project_id: str | int, source: FileSource) -> Upload:
        """Upload a file to GitLab for use in markdown.

        Uses the GitLab Markdown Uploads API to upload a file that can be
        embedded in issues, merge requests, comments, or releases.

        Args:
            project_id: Project ID or path
            source: Either FileFromPath ({"path": "/local/file.png"}) or
                    FileFromBase64 ({"base64": "...", "filename": "name.png"})

        Returns:
            Upload with url, full_path and a ready-to-use ``markdown`` tag

        Raises:
            FileNotFoundError: If file_path doesn't exist
            ConfigurationError: If base64 data is invalid
            APIError: If upload fails
        """
        if "path" in source:
            # FileFromPath variant - read file from disk
            file_path = cast(FileFromPath, source)["path"]
            with open(file_path, "rb") as f:
                file_content = f.read()
            filename = os.path.basename(file_path)
        else:
            # FileFromBase64 variant - decode base64
            try:
                file_content = base64.b64decode(source["base64"], validate=True)
            except binascii.Error as e:
                raise ConfigurationError(f"Invalid base64 data: {e}") from e
            filename = source["filename"]

        logger.info(f"Uploading file '{filename}' to project {project_id}")
        result = (
            self.dispatch()
            .with_attachment("file", filename, file_content)
            .to(f"{self._project_url(project_id)}/uploads", Single(Upload))
        )
        logger.info(f"Successfully uploaded file '{filename}' to project {project_id}")
        return result

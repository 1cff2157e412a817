from pathlib import Path

from asyncssh import Error as SSHError
from aws_lambda_powertools import Logger
from sshfs import SSHFileSystem

from app import settings
from app.exceptions import PublishException


class PublisherService:
    def __init__(self):
        self._logger = Logger(utc=True)

    def publish(self, output_dir: Path | None = None) -> None:
        output_dir = Path(output_dir or settings.output_dir)
        if not output_dir.is_dir():
            error = f"Nothing to publish, '{output_dir}' does not exist"
            self._logger.error(error)
            raise PublishException(detail=error)
        self._logger.info(
            f"Publishing {output_dir=} to {settings.ssh_host}:{settings.ssh_root_path}"
        )
        try:
            fs = SSHFileSystem(
                settings.ssh_host,
                username=settings.ssh_username,
                password=settings.ssh_password,
            )
            fs.put(f"{output_dir}/", settings.ssh_root_path, recursive=True)
        except (SSHError, OSError) as e:
            self._logger.error(e)
            raise PublishException(detail=str(e))

import re
import tomllib
from typing import Any

import yaml
from aws_lambda_powertools import Logger
from frontmatter.default_handlers import BaseHandler, YAMLHandler
from pydantic import ValidationError

from app.exceptions import FrontMatterException
from app.models.post import FrontMatter


class TOMLHandler(BaseHandler):
    """Reads ``+++`` delimited TOML front matter with the standard library parser."""

    FM_BOUNDARY = re.compile(r"^\+{3,}\s*$", re.MULTILINE)
    START_DELIMITER = END_DELIMITER = "+++"

    def load(self, fm: str, **kwargs: Any) -> dict[str, Any]:
        return tomllib.loads(fm, **kwargs)


class FrontMatterParser:
    ERROR_MISSING_FRONT_MATTER = "No front matter block found"
    ERROR_INVALID_FRONT_MATTER = "Invalid front matter"
    ERROR_NOT_A_MAPPING = "front matter must be a table of keys"

    def __init__(self):
        self._logger = Logger(utc=True)
        self._handlers = [TOMLHandler(), YAMLHandler()]

    def parse(self, text: str, path: str = "<string>") -> tuple[FrontMatter, str]:
        text = text.lstrip("\ufeff").strip()
        handler = next((h for h in self._handlers if h.detect(text)), None)
        if handler is None:
            self._logger.warning(f"Front matter not found: {path=}")
            raise FrontMatterException(f"{self.ERROR_MISSING_FRONT_MATTER} in {path}")
        if len(handler.FM_BOUNDARY.findall(text)) < 2:
            self._logger.warning(f"Front matter is not terminated: {path=}")
            raise FrontMatterException(
                f"{self.ERROR_INVALID_FRONT_MATTER} in {path}: "
                f"missing closing {handler.END_DELIMITER}"
            )
        try:
            fm, content = handler.split(text)
            metadata = handler.load(fm) or {}
            if not isinstance(metadata, dict):
                self._logger.warning(f"Front matter is not a mapping: {path=}")
                raise FrontMatterException(
                    f"{self.ERROR_INVALID_FRONT_MATTER} in {path}: "
                    f"{self.ERROR_NOT_A_MAPPING}"
                )
            # YAML allows non-string keys; extras are stored under their str()
            front_matter = FrontMatter.model_validate(
                {str(key): value for key, value in metadata.items()}
            )
            return front_matter, content.strip()
        except (tomllib.TOMLDecodeError, yaml.YAMLError, ValidationError) as e:
            self._logger.warning(f"Front matter could not be parsed: {path=}")
            raise FrontMatterException(
                f"{self.ERROR_INVALID_FRONT_MATTER} in {path}: {e}"
            )

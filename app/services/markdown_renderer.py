import math
import xml.etree.ElementTree as etree

import markdown
from aws_lambda_powertools import Logger
from markdown import util
from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

from app.models.post import Post, RenderedPost

WORDS_PER_MINUTE = 213


class DocumentInspector(Treeprocessor):
    """Collects image sources and the first paragraph of the rendered tree."""

    def run(self, root: etree.Element) -> None:
        self.md.images = [
            img.get("src") for img in root.iter("img") if img.get("src")
        ]
        # Raw HTML blocks are stashed as placeholder paragraphs.
        texts = (
            " ".join("".join(p.itertext()).split()) for p in root.iter("p")
        )
        self.md.first_paragraph = next(
            (text for text in texts if text and util.STX not in text), ""
        )


class DocumentInspectorExtension(Extension):
    def extendMarkdown(self, md: markdown.Markdown) -> None:
        md.registerExtension(self)
        self.md = md
        self.reset()
        md.treeprocessors.register(DocumentInspector(md), "document_inspector", -1)

    def reset(self) -> None:
        self.md.images = []
        self.md.first_paragraph = ""


class MarkdownRenderer:
    EXTENSIONS = ["fenced_code", "tables", "toc", "sane_lists"]

    def __init__(self):
        self._logger = Logger(utc=True)

    def render(self, post: Post) -> RenderedPost:
        md = markdown.Markdown(
            extensions=[*self.EXTENSIONS, DocumentInspectorExtension()],
            output_format="html",
        )
        html = md.convert(post.content)
        word_count = len(post.content.split())
        self._logger.debug(f"Rendered post: {post.id=} {word_count=}")
        return RenderedPost(
            post=post,
            html=html,
            summary=post.description or md.first_paragraph,
            images=md.images,
            toc=getattr(md, "toc", ""),
            reading_time=max(1, math.ceil(word_count / WORDS_PER_MINUTE)),
            word_count=word_count,
        )

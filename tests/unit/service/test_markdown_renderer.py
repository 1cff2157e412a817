import pytest

from app.models.post import Post
from app.services.markdown_renderer import MarkdownRenderer
from tests.helpers.utils import K8S_AND_POSTGRES


def make_post(content: str, description: str | None = None) -> Post:
    return Post(
        id="posts/k8s-and-postgres",
        section="posts",
        title="Kubernetes and Postgres",
        date="2024-03-09T10:30:00+01:00",
        slug="k8s-and-postgres",
        post_path="2024/3/9/k8s-and-postgres",
        content=content,
        description=description,
        source_path="posts/k8s-and-postgres.md",
    )


class TestMarkdownRenderer:
    def test_successfully_render_post(self, markdown_renderer: MarkdownRenderer):
        result = markdown_renderer.render(make_post(K8S_AND_POSTGRES))

        assert '<pre><code class="language-yaml">' in result.html
        assert 'src="/images/cluster.png"' in result.html
        assert result.images == ["/images/cluster.png"]
        assert result.summary.startswith(
            "Running PostgreSQL on Kubernetes is less scary than it used to be. "
            "Operators take care of failover"
        )
        assert result.reading_time == 1
        assert result.word_count == len(K8S_AND_POSTGRES.split())

    def test_successfully_use_description_as_summary(
        self, markdown_renderer: MarkdownRenderer
    ):
        result = markdown_renderer.render(
            make_post(K8S_AND_POSTGRES, description="Operators make it easy")
        )

        assert result.summary == "Operators make it easy"

    def test_successfully_render_table_of_contents(
        self, markdown_renderer: MarkdownRenderer
    ):
        result = markdown_renderer.render(
            make_post("## Storage\n\nText\n\n## Backups\n\nMore text")
        )

        assert 'href="#storage"' in result.toc
        assert 'href="#backups"' in result.toc
        assert '<h2 id="storage">Storage</h2>' in result.html

    def test_successfully_skip_code_blocks_for_summary(
        self, markdown_renderer: MarkdownRenderer
    ):
        result = markdown_renderer.render(
            make_post("```\nkubectl get pods\n```\n\nThe pods are *running*.")
        )

        assert result.summary == "The pods are running."

    def test_successfully_render_tables(self, markdown_renderer: MarkdownRenderer):
        result = markdown_renderer.render(
            make_post("| name | size |\n| --- | --- |\n| pg-0 | 10Gi |")
        )

        assert "<table>" in result.html
        assert "<td>pg-0</td>" in result.html

    @pytest.mark.parametrize("words, minutes", [(0, 1), (213, 1), (214, 2), (639, 3)])
    def test_successfully_estimate_reading_time(
        self, markdown_renderer: MarkdownRenderer, words: int, minutes: int
    ):
        result = markdown_renderer.render(make_post(" ".join(["word"] * words)))

        assert result.reading_time == minutes

    def test_successfully_render_repeatedly_with_same_result(
        self, markdown_renderer: MarkdownRenderer
    ):
        post = make_post(K8S_AND_POSTGRES)

        assert markdown_renderer.render(post) == markdown_renderer.render(post)

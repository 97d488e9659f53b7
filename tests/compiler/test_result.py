"""Tests for CompiledPaths."""

from searchpaths.compiler.result import CompiledPaths


class TestCompiledPaths:
    def test_empty(self):
        result = CompiledPaths()

        assert result.is_empty
        assert result.to_dict() == {"paths": {}, "reversedPaths": {}}
        assert result.paths_for("Post") == ()

    def test_paths_keep_duplicates(self):
        result = CompiledPaths()
        result.add_path("Post", "comments")
        result.add_path("Post", "comments")

        assert result.paths["Post"] == ("comments", "comments")
        assert not result.is_empty

    def test_reversed_paths_deduplicated_in_first_seen_order(self):
        result = CompiledPaths()
        for path in ("post", "author.posts", "post"):
            result.add_reversed_path("Comment", path)

        assert result.reversed_paths_for("Comment") == ("post", "author.posts")

    def test_to_dict_uses_lists(self):
        result = CompiledPaths()
        result.add_path("Post", "")
        result.add_reversed_path("Post", "")

        assert result.to_dict() == {"paths": {"Post": [""]}, "reversedPaths": {"Post": [""]}}

"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field

from relnotes.diff.models import RenderOptions


@dataclass
class ReleaseConfig:
    max_body_length: int = 125000  # GitHub rejects larger release bodies
    changelog_file: str = "CHANGELOG.md"
    body_artifact: str = "release_body.md"
    unshallow: bool = True
    upload_artifacts: bool = True


@dataclass
class RenderConfig:
    indent_width: int = 8
    wide_char_width: float = 1.5

    def options(self) -> RenderOptions:
        return RenderOptions(
            indent_width=self.indent_width,
            wide_char_width=self.wide_char_width,
        )


@dataclass
class CommitsConfig:
    collapse_after: int = 3  # commits shown before the <details> fold
    utc_offset_hours: float = 8
    time_label: str = " (北京时间)"


@dataclass
class GitHubConfig:
    api_url: str = "https://api.github.com"
    timeout: float = 30.0


@dataclass
class RelnotesConfig:
    version: str = "1.0"
    release: ReleaseConfig = field(default_factory=ReleaseConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    commits: CommitsConfig = field(default_factory=CommitsConfig)
    github: GitHubConfig = field(default_factory=GitHubConfig)

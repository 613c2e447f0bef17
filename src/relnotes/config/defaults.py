"""Starter .relnotes.toml template."""

DEFAULT_TOML = """\
# relnotes configuration
version = "1.0"

[release]
max_body_length = 125000      # longer bodies are cut and end with "(More)... ..."
changelog_file = "CHANGELOG.md"
body_artifact = "release_body.md"
unshallow = true              # fetch full history on shallow CI checkouts
upload_artifacts = true       # attach workflow run artifacts as <name>.zip

[render]
indent_width = 8              # change groups are padded to a multiple of this
wide_char_width = 1.5         # width of characters above U+00FF

[commits]
collapse_after = 3
utc_offset_hours = 8
time_label = " (北京时间)"

[github]
# api_url = "https://api.github.com"
# timeout = 30.0
"""

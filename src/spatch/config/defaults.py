"""Starter .spatch.toml template."""

CONFIG_FILENAME = ".spatch.toml"

DEFAULT_TOML = """\
# spatch configuration
version = "1.0"

[split]
mode = "patch"            # patch | file (file writes the contents of added/removed files)
only = "all"              # all | new | removed

[filter]
# glob = "*.c"            # match against the file path or its basename
# regex = "^src/"         # searched anywhere in the path; excludes glob

[output]
directory = "."
on_collision = "overwrite"   # overwrite | error | suffix
format = "terminal"          # terminal | json
show_summary = true
"""

"""Starter .trunkdump.toml template."""

DEFAULT_TOML = """\
# trunkdump configuration
version = "1.0"

[parse]
root = "trunk/"             # subtree of the dump to keep
verbosity = 1               # 0 quiet | 1 per revision | 2 per node
# tz_offset_minutes = 60    # added to svn:date; default is the local offset
on_io_error = "raise"       # raise | drop (drop the node being read)
drop_top_level_adds = false # also ignore adds of files directly in the root

[filter]
# include = ["src*", "build.xml>120"]
# exclude = ["docs*", "old.txt<40"]
# file = "filters.yaml"

[output]
format = "terminal"         # terminal | json
show_nodes = true
show_log = false
"""

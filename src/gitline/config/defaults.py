"""Starter gitline.toml template."""

DEFAULT_TOML = """\
# gitline configuration
version = "1.0"

[git_status]
# $all_status expands to every category below in a fixed order.
# A group whose variables are all empty disappears, brackets included.
format = '[\\[$all_status\\] ]($style)'
style = "red bold"
conflicted = "="
ahead = "⇡"
behind = "⇣"
diverged = "⇕"          # also knows $ahead_count and $behind_count
untracked = "?"
stashed = '\\$'
modified = "!"
staged = "+"            # e.g. '+[$count](green)'
added = "+"
renamed = "»"
deleted = "✘"
# disabled = false

[output]
# plain = false          # print without colour
# trailing_newline = false
"""

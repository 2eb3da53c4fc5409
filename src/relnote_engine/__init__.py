"""Release-note fragment merging.

Merges many small Markdown fragments (each a heading followed by body
content) into a single document. Headings are matched by text; headings
beginning with '+' are free and need not match an existing section.

A fragment must begin with a non-empty matching heading.
"""

__version__ = "0.1.0"

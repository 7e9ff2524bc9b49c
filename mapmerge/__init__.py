"""SVG map attribute merger package.

This package merges per-region metadata from a CSV table into the
``<path>`` elements of an SVG map, writing ``long-name``, ``value`` and
``region`` attributes into each element while leaving every other byte of
the document untouched.

The package keeps a layered architecture: the command-line program
(user experience and status output), the runner (file I/O and logging),
and the core pipeline layer (pure text transformation). The core never
touches the filesystem and can be used directly from other code.

Package Structure
-----------------
- `pipeline/map_merger/`:
    Table parsing, lookup index construction, markup rewriting, the merge
    orchestrator, resolution reporting and the file-level runner.
- `program_merge_map.py`: Command-line entrypoint (``mapmerge``).
- `config.py`: All configuration constants, as UPPER_SNAKE_CASE.
- `exceptions.py`: Project-specific exception classes.

Examples
--------
>>> from mapmerge.pipeline.map_merger import run
>>> svg = '<svg><path id="p1" d="M0 0"/></svg>'
>>> table = "id,label,value,region\\np1,North,7,2\\n"
>>> 'long-name="North"' in run(svg, table)
True
"""

__version__ = "1.0.0"

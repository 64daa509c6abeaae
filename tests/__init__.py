"""ORDERDESK test suite.

Folder taxonomy
- unit/         : Isolated, fast checks of a single module/class/function.
- contract/     : Behavior every adapter of a port must share (memory and SQLite).
- integration/  : SQLite databases, Alembic migrations and the wired application.
- functional/   : User-visible CLI flows, black-box through click's CliRunner.
- e2e/          : Logging and global options of the ``orderdesk`` command.
- fixtures/     : Plugins loaded from ``tests/conftest.py`` (no tests here).
- helpers/      : Shared assertion utilities (no tests here).

General guidance
- Keep unit fast and deterministic (no real I/O); prefer fakes over mocks at boundaries.
- Contract parametrizes implementations to ensure consistent behavior.
- Property-based tests live with the layer they exercise and use @pytest.mark.property.
"""

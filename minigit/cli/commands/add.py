"""Add command - stage files for commit."""

from pathlib import Path

import click

from minigit.core.errors import MiniGitError
from minigit.core.index import Index
from minigit.core.repository import Repository
from minigit.cli.output import success, error, info, warning

CONFLICT_MARKERS = (b'<<<<<<< HEAD', b'=======', b'>>>>>>> ')


def has_conflict_markers(content: bytes) -> bool:
    """Check if file content still contains conflict markers."""
    return all(marker in content for marker in CONFLICT_MARKERS)


def expand_paths(repo, path_pattern):
    """Turn a command-line path into work-tree relative file paths."""
    path = Path(path_pattern)
    resolved = path if path.is_absolute() else Path.cwd() / path

    if resolved.is_dir():
        prefix = repo.relative_path(resolved)
        return [
            p for p in repo.working_files()
            if prefix in ('', '.') or p == prefix or p.startswith(prefix + '/')
        ]

    return [repo.relative_path(resolved)]


@click.command('add')
@click.argument('paths', nargs=-1, required=True)
def add_cmd(paths):
    """
    Add file contents to the staging area.

    Stage files for the next commit. Modified files must be added
    again to stage the new changes. Directories are added recursively.

    Examples:
        minigit add file.txt
        minigit add src/
        minigit add .
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a minigit repository"))
        raise click.Abort()

    index = Index.load(repo)
    added_files = []
    failed_files = []
    conflict_warnings = []

    for path_pattern in paths:
        try:
            rel_paths = expand_paths(repo, path_pattern)
        except ValueError:
            failed_files.append((path_pattern, "Outside repository"))
            continue

        for rel_path in rel_paths:
            try:
                index.add_file(repo, rel_path)
            except MiniGitError as e:
                failed_files.append((path_pattern, str(e)))
                continue

            added_files.append(rel_path)
            if has_conflict_markers(repo.storage.read(rel_path)):
                conflict_warnings.append(rel_path)

    if added_files:
        index.save(repo)
        click.echo(success(f"Added {len(added_files)} file(s) to staging area"))
        for file in added_files:
            click.echo(info(f"  {file}"))

    if conflict_warnings:
        click.echo()
        click.echo(warning(f"{len(conflict_warnings)} file(s) still contain conflict markers:"))
        for file in conflict_warnings:
            click.echo(warning(f"  {file}"))

    if failed_files:
        click.echo()
        click.echo(error(f"Failed to add {len(failed_files)} file(s):"))
        for file, reason in failed_files:
            click.echo(error(f"  {file}: {reason}"))
        raise click.Abort()

    if not added_files:
        click.echo(error("No files matched"))
        raise click.Abort()

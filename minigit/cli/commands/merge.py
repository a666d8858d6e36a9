"""Merge command for MiniGit."""

import click

from minigit.core.errors import MiniGitError
from minigit.core.repository import Repository
from minigit.operations.merge import MergeStatus, ADDED, UPDATED, DELETED, CONTENT
from minigit.cli.output import success, error, warning, info, short

ACTION_MESSAGES = {
    ADDED: "Taking new file from branch '{branch}': {path}",
    UPDATED: "Taking changes from branch '{branch}' for: {path}",
    DELETED: "Removing file deleted in branch '{branch}': {path}",
}


@click.command('merge')
@click.argument('branch', required=False)
@click.option('--abort', is_flag=True, help='Abort the current merge operation')
def merge_cmd(branch, abort):
    """
    Merge a branch into the current branch.

    Runs a three-way merge against the common ancestor. Files changed on
    both sides are written with conflict markers and no commit is made;
    resolve them, add the files and commit to complete the merge, or
    abort it to go back to HEAD.

    Examples:
        minigit merge feature       # Merge feature into the current branch
        minigit merge --abort       # Abort a conflicted merge
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a minigit repository"))
        raise click.Abort()

    if abort:
        if not repo.merge.is_merge_in_progress():
            click.echo(error("No merge in progress"))
            raise click.Abort()

        try:
            repo.merge.abort_merge()
        except MiniGitError as e:
            click.echo(error(str(e)))
            raise click.Abort()

        click.echo(success("Merge aborted"))
        click.echo(info("Working tree has been reset to HEAD"))
        return

    if not branch:
        raise click.UsageError("Missing branch name (or use --abort)")

    current_hash = repo.refs.resolve_head()
    target_hash = repo.refs.read_branch(branch)
    already_contained = bool(
        current_hash and target_hash and repo.graph.is_ancestor(target_hash, current_hash)
    )

    try:
        result = repo.merge.merge_branch(branch)
    except MiniGitError as e:
        click.echo(error(str(e)))
        raise click.Abort()

    if result.status is MergeStatus.ALREADY_UP_TO_DATE:
        click.echo(info("Already up to date"))
        return

    click.echo(info(f"Merging branch '{branch}' into current branch"))
    if result.base:
        click.echo(info(f"Common ancestor: {short(result.base)}"))
    else:
        click.echo(warning("No common ancestor; treating all files as new"))

    for action in result.actions:
        click.echo(info(ACTION_MESSAGES[action.kind].format(branch=branch, path=action.path)))

    if result.status is MergeStatus.CONFLICTED:
        for conflict in result.conflicts:
            if conflict.kind == CONTENT:
                click.echo(error(f"CONFLICT (content): {conflict.path} modified in both branches"))
            else:
                click.echo(error(
                    f"CONFLICT (delete/modify): {conflict.path} was deleted in branch "
                    f"'{branch}' but modified in current branch"
                ))
        click.echo(warning("Merge conflicts detected. Resolve them and commit the result."))
        click.echo(info("  1. Edit the conflicted files (look for <<<<<<< HEAD, =======, >>>>>>>)"))
        click.echo(info("  2. Stage the resolved files: minigit add <file>"))
        click.echo(info("  3. Complete the merge: minigit commit -m \"Merge message\""))
        click.echo(info("  Or run 'minigit merge --abort' to give up"))
        raise click.exceptions.Exit(1)

    if already_contained:
        click.echo(info(f"Branch '{branch}' was already contained in the current history; "
                        "recorded a merge commit anyway"))
    click.echo(success(f"Merge successful. New commit: {short(result.commit)}"))

"""CLI commands for MiniGit."""

from minigit.cli.commands.init import init_cmd
from minigit.cli.commands.add import add_cmd
from minigit.cli.commands.commit import commit_cmd
from minigit.cli.commands.log import log_cmd
from minigit.cli.commands.branch import branch_cmd
from minigit.cli.commands.checkout import checkout_cmd
from minigit.cli.commands.merge import merge_cmd
from minigit.cli.commands.diff import diff_cmd
from minigit.cli.commands.config import config_cmd

__all__ = ['init_cmd', 'add_cmd', 'commit_cmd', 'log_cmd', 'branch_cmd',
           'checkout_cmd', 'merge_cmd', 'diff_cmd', 'config_cmd']

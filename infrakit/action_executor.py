"""
action_executor.py: Module for executing deploy actions with dry-run support
"""
import logging
from typing import Any, Dict, List

from .utils import error, info, success


class ActionExecutor:
    """
    ActionExecutor: Class responsible for executing action plans with dry-run support.
    Actions run in order and the first failure aborts the remaining ones.
    """

    def __init__(self):
        self.logger = logging.getLogger("infrakit.executor")

    def execute_actions(self, actions: List[Dict[str, Any]], dry_run: bool = False) -> int:
        """
        Execute a list of actions with optional dry-run
        :param actions: List of action dictionaries (desc, func, args, kwargs)
        :param dry_run: Whether to only print the plan
        :return: Number of actions executed
        :raises: whatever the failing action raised, after reporting it
        """
        if not actions:
            info("Nothing to do.")
            return 0

        info("Planned actions:")
        for act in actions:
            print(f"  {act['desc']}")

        if dry_run:
            info("DRY RUN: No changes applied")
            return 0

        done = 0
        for act in actions:
            func = act['func']
            args = act.get('args', ())
            kwargs = act.get('kwargs', {})

            self.logger.debug(f"Executing: {act['desc']}")
            try:
                func(*args, **kwargs)
            except Exception as e:
                error(f"Failed to execute: {act['desc']} → {e}")
                if done < len(actions) - 1:
                    error(f"Aborting; {len(actions) - done - 1} remaining action(s) skipped")
                raise
            done += 1

        success("All actions completed")
        return done

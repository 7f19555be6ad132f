"""
Base class for navigation agents
"""

from snakenav.grid import Direction, NavigationState


class NavigationAgent:
    """Base class for navigation agents"""

    name = 'base'

    def determine_next_move(self, state: NavigationState) -> Direction:
        """
        Pick the direction for the coming tick.

        The returned direction may be a reversal of state.current_direction;
        rejecting reversals is the tick driver's job.

        Args:
            state: Read-only snapshot of the board

        Returns:
            Direction to move
        """
        raise NotImplementedError

    def reset(self, width: int, height: int):
        """Called by the tick driver after a reset or resize"""

    def get_action(self, env) -> int:
        """
        Get absolute action (0=UP, 1=RIGHT, 2=DOWN, 3=LEFT) for a SnakeEnv

        Args:
            env: SnakeEnv instance

        Returns:
            Action to take
        """
        return int(self.determine_next_move(env.get_state()))

"""
Score and time tracking for display.

The Scoreboard listens to game events and clock ticks. It keeps the current
score, the high score, finished-game history and the elapsed time of the
game in progress.
"""
from collections import deque
from typing import Dict

from snakegame import Event, Snapshot


class Scoreboard:
    """
    Collects per-game results for the score and time widgets.

    Keeps a rolling window of finished games so long sessions do not grow
    without bound.
    """

    def __init__(self, max_games: int = 1000):
        """
        Args:
            max_games: Maximum number of finished games to retain
        """
        self.max_games = max_games

        self.game_scores: deque = deque(maxlen=max_games)
        self.game_lengths: deque = deque(maxlen=max_games)   # ticks
        self.game_times: deque = deque(maxlen=max_games)     # seconds
        self.game_endings: deque = deque(maxlen=max_games)   # event names

        self.score = 0
        self.highscore = 0
        self.elapsed_seconds = 0
        self._ticks = 0
        self._games_played = 0
        self._track_highscore = True

    def set_track_highscore(self, enabled: bool):
        """Autoplay games can be kept out of the high score."""
        self._track_highscore = enabled

    def on_event(self, event: Event, snapshot: Snapshot):
        """Listener for SnakeStateMachine.add_listener()."""
        if event is Event.MOVED or event is Event.EATEN:
            self._ticks += 1
        self.score = snapshot.score
        if self._track_highscore and self.score > self.highscore:
            self.highscore = self.score
        if event in (Event.WALL_COLLISION, Event.SELF_COLLISION, Event.WON):
            self.on_game_end(event)

    def on_second(self, seconds: int):
        """Listener for ElapsedClock."""
        self.elapsed_seconds = seconds

    def on_game_end(self, event: Event):
        self.game_scores.append(self.score)
        self.game_lengths.append(self._ticks)
        self.game_times.append(self.elapsed_seconds)
        self.game_endings.append(event.value)
        self._games_played += 1

    def new_game(self):
        """Clear the per-game counters, keeping history and high score."""
        self.score = 0
        self.elapsed_seconds = 0
        self._ticks = 0

    @property
    def games_played(self) -> int:
        return self._games_played

    def get_summary(self, window: int = 100) -> Dict:
        """
        Summary of the most recent finished games. 'games' counts the games in
        the window; games_played counts every game.

        Args:
            window: Number of recent games to summarize
        """
        scores = list(self.game_scores)[-window:]
        lengths = list(self.game_lengths)[-window:]
        endings = list(self.game_endings)[-window:]

        if not scores:
            return {
                'avg_score': 0,
                'avg_length': 0,
                'max_score': 0,
                'wins': 0,
                'games': 0,
            }

        return {
            'avg_score': sum(scores) / len(scores),
            'avg_length': sum(lengths) / len(lengths),
            'max_score': max(scores),
            'wins': endings.count(Event.WON.value),
            'games': len(scores),
        }

    def to_dict(self) -> Dict:
        return {
            'score': self.score,
            'highscore': self.highscore,
            'time': self.elapsed_seconds,
            'games': self._games_played,
        }

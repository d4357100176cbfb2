"""Interactive text menu driving a :class:`MovieSession`."""

from __future__ import annotations

from typing import Callable, Sequence

from .models import Movie
from .services.session import MovieSession
from .services.storage import StorageError
from .strategies import DEFAULT_STRATEGY, STRATEGIES, Strategy

InputFunc = Callable[[str], str]
OutputFunc = Callable[[str], None]

USER_MENU_OPTIONS: tuple[str, ...] = (
    "Browse movies",
    "Add movie to watchlist",
    "Remove movie from watchlist",
    "View watchlist",
    "Mark movie as watched",
    "View history",
    "Get recommendations",
    "View recommendation strategies",
    "Logout",
)

# Menu digits map onto the strategy table order.
STRATEGY_CHOICES: dict[str, Strategy] = {
    str(index): definition.key for index, definition in enumerate(STRATEGIES, start=1)
}


class MenuLoop:
    """Text menu mirroring the login, watch-state and recommendation flows."""

    def __init__(
        self,
        session: MovieSession,
        *,
        input_func: InputFunc = input,
        output_func: OutputFunc = print,
        app_name: str = "Movie Recommendation & Tracker System",
    ) -> None:
        self.session = session
        self._input = input_func
        self._output = output_func
        self.app_name = app_name
        self._running = False

    def run(self) -> None:
        self._output(f"=== {self.app_name} ===")
        self._running = True
        while self._running:
            if self.session.is_logged_in:
                self.show_user_menu()
            else:
                self.show_main_menu()

    def show_main_menu(self) -> None:
        self._output("\n=== Main Menu ===")
        self._output("1. Login")
        self._output("2. Exit")
        choice = self._read_choice()
        if choice == 1:
            self.login()
        elif choice == 2:
            self._output(f"Thank you for using {self.app_name}!")
            self._running = False
        elif choice is not None:
            self._output("Invalid option. Please try again.")

    def show_user_menu(self) -> None:
        user = self.session.current_user
        if user is None:
            return
        self._output(f"\n=== User Menu (Logged in as: {user.username}) ===")
        for index, label in enumerate(USER_MENU_OPTIONS, start=1):
            self._output(f"{index}. {label}")
        choice = self._read_choice()
        if choice is None:
            return

        actions: dict[int, Callable[[], None]] = {
            1: self.browse_movies,
            2: self.add_to_watchlist,
            3: self.remove_from_watchlist,
            4: self.view_watchlist,
            5: self.mark_as_watched,
            6: self.view_history,
            7: self.get_recommendations,
            8: self.view_strategies,
            9: self.logout,
        }
        action = actions.get(choice)
        if action is None:
            self._output("Invalid option. Please try again.")
            return
        try:
            action()
        except StorageError as exc:
            self._output(str(exc))

    def login(self) -> None:
        username = self._input("Enter username: ").strip()
        password = self._input("Enter password: ").strip()
        if self.session.login(username, password) is None:
            self._output("Invalid username or password. Please try again.")
            return
        self._output(f"Login successful! Welcome, {username}!")

    def logout(self) -> None:
        user = self.session.logout()
        self._output(f"Goodbye, {user.username}!")

    def browse_movies(self) -> None:
        self._output("\n=== All Movies ===")
        movies = self.session.browse()
        for movie in movies:
            self._output(str(movie))
        self._output(f"Total movies: {len(movies)}")

    def add_to_watchlist(self) -> None:
        movie_id = self._read_movie_id("Enter movie ID to add to watchlist: ")
        if movie_id is None:
            return
        user = self.session.current_user
        if self.session.add_to_watchlist(movie_id):
            self._output("Movie added to watchlist successfully.")
        elif user is not None and movie_id in user.history:
            self._output("Movie is already in your history.")
        else:
            self._output("Movie is already in your watchlist.")

    def remove_from_watchlist(self) -> None:
        raw = self._input("Enter movie ID to remove from watchlist: ").strip()
        removed = self.session.remove_from_watchlist(raw) or (
            raw.upper() != raw and self.session.remove_from_watchlist(raw.upper())
        )
        if removed:
            self._output("Movie removed from watchlist successfully.")
        else:
            self._output("Movie not found in your watchlist.")

    def view_watchlist(self) -> None:
        self._output("\n=== Your Watchlist ===")
        movies = self.session.watchlist_movies()
        if not movies:
            self._output("Your watchlist is empty.")
            return
        self._render(movies)

    def mark_as_watched(self) -> None:
        movie_id = self._read_movie_id("Enter movie ID to mark as watched: ")
        if movie_id is None:
            return
        if self.session.mark_watched(movie_id):
            self._output("Movie marked as watched successfully.")
        else:
            self._output("Movie is already in your history.")

    def view_history(self) -> None:
        self._output("\n=== Your Viewing History ===")
        movies = self.session.history_movies()
        if not movies:
            self._output("You haven't watched any movies yet.")
            return
        self._render(movies)

    def get_recommendations(self) -> None:
        self._output("\n=== Choose Recommendation Strategy ===")
        for index, definition in enumerate(STRATEGIES, start=1):
            self._output(f"{index}. {definition.menu_label}")
        default_choice = next(
            key for key, value in STRATEGY_CHOICES.items() if value is DEFAULT_STRATEGY
        )
        choice = self._input(
            f"Please choose a strategy (1-{len(STRATEGIES)}, default {default_choice}): "
        ).strip()
        strategy = DEFAULT_STRATEGY
        if choice:
            selected = STRATEGY_CHOICES.get(choice)
            if selected is None:
                self._output(f"Invalid choice. Using {DEFAULT_STRATEGY.value} strategy.")
            else:
                strategy = selected

        default_count = self.session.default_count
        raw_count = self._input(
            f"Enter number of recommendations (default {default_count}): "
        ).strip()
        count: int | None = None
        if raw_count:
            try:
                count = int(raw_count)
            except ValueError:
                self._output(f"Invalid number. Using default value {default_count}.")

        recommendations = self.session.recommend(strategy, count)
        self._output(f"\n=== {self.session.engine.current_strategy_name()} ===")
        if not recommendations:
            self._output("No recommendations available.")
            return
        self._render(recommendations, numbered=True)

    def view_strategies(self) -> None:
        self._output("\n=== Available Recommendation Strategies ===")
        for index, info in enumerate(self.session.strategy_overview(), start=1):
            self._output(f"{index}. {info.name}")
            self._output(f"   {info.description}")
            self._output("")
        self._output(
            f"Current strategy: {self.session.engine.current_strategy_name()}"
        )

    def _read_choice(self) -> int | None:
        raw = self._input("Please choose an option: ").strip()
        try:
            return int(raw)
        except ValueError:
            self._output("Please enter a valid number.")
            return None

    def _read_movie_id(self, prompt: str) -> str | None:
        """Read an id, accepting lower-case input for upper-case catalog ids."""

        raw = self._input(prompt).strip()
        for candidate in (raw, raw.upper()):
            if candidate in self.session.catalog:
                return candidate
        self._output("Movie ID not found.")
        return None

    def _render(self, movies: Sequence[Movie], *, numbered: bool = False) -> None:
        for index, movie in enumerate(movies, start=1):
            self._output(f"{index}. {movie}" if numbered else str(movie))

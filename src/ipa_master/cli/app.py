"""Console game loop tying the session, progression and store together."""

import asyncio

import structlog

from ipa_master.cli import screens
from ipa_master.cli.console import ConsoleInput, dim, green, red, yellow
from ipa_master.config import Settings
from ipa_master.engine.session import GameSession
from ipa_master.errors import InvalidDifficultySelection, PersistenceFailure
from ipa_master.hints import get_hints
from ipa_master.models.game import GameMode, GameResult, GameSettings
from ipa_master.models.user_profile import ProgressReport, UserProfile
from ipa_master.models.word import DifficultyLevel
from ipa_master.progression.profile import record_game_result
from ipa_master.storage.profile_store import ProfileStore
from ipa_master.words.dictionary import WordSource

logger = structlog.get_logger()

CONTINUE_PROMPT = dim("Press Enter to continue…")


def parse_difficulty_choice(
    choice: str | None,
    available: list[DifficultyLevel] | None = None,
) -> DifficultyLevel | None:
    """Turn a 1-5 menu choice into a difficulty scope (None = all).

    Raises:
        InvalidDifficultySelection: If the choice is out of range or names a
            difficulty with no words.
    """
    try:
        index = int(choice or "") - 1
    except ValueError:
        raise InvalidDifficultySelection(choice)
    if not 0 <= index < len(screens.DIFFICULTY_CHOICES):
        raise InvalidDifficultySelection(choice)

    difficulty = screens.DIFFICULTY_CHOICES[index]
    if difficulty is not None and available is not None and difficulty not in available:
        raise InvalidDifficultySelection(choice)
    return difficulty


class GameApp:
    """Main menu and game loop.

    Args:
        settings: Application settings.
        word_source: Loaded word source.
        store: Profile store.
        console: Line input (stdin by default).
    """

    def __init__(
        self,
        settings: Settings,
        word_source: WordSource,
        store: ProfileStore,
        console: ConsoleInput | None = None,
    ):
        self.settings = settings
        self.word_source = word_source
        self.store = store
        self.console = console or ConsoleInput()
        self.session: GameSession | None = None
        self._running = True

    def _load_profile(self) -> UserProfile:
        try:
            return self.store.read()
        except PersistenceFailure as e:
            logger.error("profile_load_failed", error=str(e))
            return self.store.new_profile()

    async def _pause(self) -> None:
        print()
        await self.console.prompt(CONTINUE_PROMPT)

    async def run(self) -> None:
        """Show the main menu until the player exits."""
        actions = [
            *(lambda mode=mode: self.play(mode) for mode, _ in screens.MENU_MODES),
            self.show_statistics,
            self.show_achievements,
            self.show_settings,
            self.show_help,
            self.exit,
        ]

        while self._running:
            screens.render_menu(self._load_profile())
            choice = await self.console.prompt(f"\nChoose an option (1-{len(actions)}): ")
            if choice is None:
                await self.exit()
                break

            try:
                action = actions[int(choice) - 1] if int(choice) >= 1 else None
            except (ValueError, IndexError):
                action = None

            if action is None:
                print(red(f"❌ Invalid choice. Please enter 1-{len(actions)}."))
                await asyncio.sleep(0.8)
                continue
            await action()

    async def select_difficulty(self) -> DifficultyLevel | None:
        """Ask for a difficulty scope until a valid one is given.

        Raises:
            EOFError: If input closes before a choice is made.
        """
        available = self.word_source.available_difficulties()
        screens.render_difficulty_selection(available)
        while True:
            choice = await self.console.prompt("\nChoose difficulty (1-5): ")
            if choice is None:
                raise EOFError("input closed during difficulty selection")
            try:
                return parse_difficulty_choice(choice, available)
            except InvalidDifficultySelection as e:
                logger.debug("difficulty_selection_invalid", choice=e.choice)
                print(red("❌ Invalid choice. Please enter 1-5 (a difficulty that has words)."))

    async def play(self, mode: GameMode) -> None:
        """Run one game of the given mode."""
        try:
            difficulty = await self.select_difficulty()
        except EOFError:
            logger.info("game_not_started", mode=mode.value)
            return
        game_settings = GameSettings.for_mode(
            mode,
            difficulty,
            time_attack_seconds=self.settings.time_attack_seconds,
        )
        session = GameSession(game_settings, self.word_source)
        self.session = session
        session.start()
        session.start_countdown()

        try:
            await self._game_loop(session)
        except asyncio.CancelledError:
            self._record(session.end_game())
            raise
        finally:
            self.session = None

        result = session.end_game()
        report = self._record(result)
        screens.render_results(session.snapshot(), result.duration_seconds, report)
        await self._pause()

    async def _game_loop(self, session: GameSession) -> None:
        feedback = ""
        while not session.is_finished:
            snapshot = session.snapshot()
            hints = get_hints(snapshot.current_word.transcription)
            screens.render_game(snapshot, hints, feedback)

            guess = await self._prompt_guess(session)
            if guess is None:
                break

            command = guess.lower()
            if command == "quit":
                break
            if command == "hint":
                if session.request_hint():
                    feedback = yellow(f"💡 Hints used: {session.hints_used}")
                else:
                    feedback = dim("Hints are already shown for this word.")
                continue

            result = session.submit_guess(command)
            feedback = screens.format_feedback(result)
            if not result.should_continue:
                break

    async def _prompt_guess(self, session: GameSession) -> str | None:
        """Wait for a guess, giving up if the game finishes first."""
        prompt = asyncio.create_task(self.console.prompt("\nYour answer: "))
        finished = asyncio.create_task(session.wait_finished())
        done, pending = await asyncio.wait(
            {prompt, finished}, return_when=asyncio.FIRST_COMPLETED
        )
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)

        if prompt in done:
            return prompt.result()
        print()
        return None

    def _record(self, result: GameResult) -> ProgressReport | None:
        try:
            return record_game_result(self.store, result, history_limit=self.settings.history_limit)
        except PersistenceFailure as e:
            logger.error("game_record_failed", error=str(e), score=result.score)
            return None

    async def show_statistics(self) -> None:
        screens.render_statistics(self._load_profile())
        await self._pause()

    async def show_achievements(self) -> None:
        profile = self._load_profile()
        screens.render_achievements(profile.unlocked_achievements, profile.locked_achievements)
        await self._pause()

    async def show_help(self) -> None:
        screens.render_help()
        await self._pause()

    async def show_settings(self) -> None:
        screens.render_settings()
        choice = await self.console.prompt("\nChoose option (1-4): ")

        try:
            if choice == "1":
                name = await self.console.prompt("Enter new name: ")
                if name:
                    self.store.rename(name)
                    print(green(f"✅ Name changed to: {name}"))
            elif choice == "2":
                confirm = await self.console.prompt(
                    red("❌ Are you sure? This will delete ALL progress (y/N): ")
                )
                if confirm and confirm.lower() == "y":
                    self.store.reset()
                    print(yellow("✅ Progress reset!"))
            elif choice == "3":
                print(green("✅ Your progress data:"))
                print(self.store.export())
            elif choice == "4" or choice is None:
                return
            else:
                print(red("❌ Invalid choice."))
        except PersistenceFailure as e:
            logger.error("settings_action_failed", choice=choice, error=str(e))
            print(red(f"❌ {e}"))

        await self._pause()

    async def exit(self) -> None:
        self._running = False
        screens.render_goodbye()

"""Screen rendering for the console front end."""

from ipa_master.cli.console import blue, bold, clear_screen, cyan, dim, green, red, yellow
from ipa_master.models.game import GameMode, GuessResult, SessionSnapshot
from ipa_master.models.user_profile import Achievement, ProgressReport, UserProfile
from ipa_master.models.word import DifficultyLevel, Hint

MAIN_WIDTH = 80

DIFFICULTY_COLORS = {
    DifficultyLevel.BEGINNER: green,
    DifficultyLevel.INTERMEDIATE: yellow,
    DifficultyLevel.ADVANCED: blue,
    DifficultyLevel.EXPERT: red,
}

MENU_MODES: list[tuple[GameMode, str]] = [
    (GameMode.CLASSIC, "📚 Classic Game"),
    (GameMode.TIME_ATTACK, "🏃 Time Attack"),
    (GameMode.STREAK_10, "🔥 10 Streak Challenge"),
    (GameMode.STREAK_50, "🐦 50 Streak Challenge"),
    (GameMode.STREAK_100, "🚩 100 Streak Challenge"),
]

MENU_OPTIONS = [
    "📊 View Statistics",
    "🏆 View Achievements",
    "⚙️  Settings",
    "❓ Help",
    "🚪 Exit",
]

DIFFICULTY_CHOICES: list[DifficultyLevel | None] = [None, *DifficultyLevel.ordered()]


def render_title(title: str = "🎯 IPA TRANSLATION MASTER 🎯") -> None:
    print(blue("═" * MAIN_WIDTH))
    print(cyan(bold(title)))
    print(blue("═" * MAIN_WIDTH))
    print()


def render_menu(profile: UserProfile) -> None:
    clear_screen()
    render_title()
    print(green(f"Welcome back, {profile.name}!"))
    print(yellow(f"Level {profile.level} | Experience: {profile.experience}"))

    left = ["Game Modes:"] + [f"{i}. {label}" for i, (_, label) in enumerate(MENU_MODES, 1)]
    offset = len(MENU_MODES) + 1
    right = ["Other Options:"] + [f"{i}. {label}" for i, label in enumerate(MENU_OPTIONS, offset)]
    width = max(len(line) for line in left) + 10
    print()
    for i, (l, r) in enumerate(zip(left, right)):
        line = f"{l.ljust(width)}{r}"
        print(bold(line) if i == 0 else line)


def render_difficulty_selection(available: list[DifficultyLevel]) -> None:
    render_title()
    print(bold("Select Difficulty:"))
    print("1. 🌈 All Difficulties")
    for i, level in enumerate(DifficultyLevel.ordered(), 2):
        note = "" if level in available else dim(" (no words)")
        print(f"{i}. {DIFFICULTY_COLORS[level](level.label)}{note}")


def render_game(snapshot: SessionSnapshot, hints: list[Hint], feedback: str = "") -> None:
    clear_screen()
    render_title(f"🎯 {snapshot.settings.mode.label.upper()} MODE")

    stats = f"Score: {snapshot.score} | Streak: {snapshot.streak} | Best: {snapshot.max_streak}"
    if snapshot.time_remaining is not None:
        stats += f" | Time: {snapshot.time_remaining}s"
    if snapshot.settings.target_streak is not None:
        stats += f" | Target: {snapshot.settings.target_streak}"
    print(cyan(stats))
    print()

    word = snapshot.current_word
    if word is not None:
        print(bold("Pronunciation:"))
        print(green(f"/{word.transcription}/"))
        print()
        print(dim(f"Difficulty: {DIFFICULTY_COLORS[word.difficulty](word.difficulty.label)}"))

    if feedback:
        print(f"\n{feedback}")

    print()
    print(yellow(bold('💡 IPA HINTS (type "hint")')))
    for hint in hints:
        example = hint.example if snapshot.hints_enabled else "*" * len(hint.example)
        print(f"  {green(hint.symbol)}: {example}")

    print(f"\n{dim('Commands: answer | hint | quit')}")


def format_feedback(result: GuessResult) -> str:
    if result.is_correct:
        icon = "🔥" if result.streak and result.streak % 5 == 0 else "✅"
        return green(f"{icon} {result.message}")
    return red(f"❌ {result.message}")


def format_duration(seconds: int) -> str:
    return f"{seconds // 60}:{seconds % 60:02d}"


def render_results(
    snapshot: SessionSnapshot,
    duration_seconds: int,
    report: ProgressReport | None,
) -> None:
    clear_screen()
    render_title("🎯 GAME OVER")

    if snapshot.is_winner:
        print(green("✅ 🎉 CONGRATULATIONS! YOU WON! 🎉"))
        print()

    print(bold("Final Results:"))
    print(f"Score: {cyan(snapshot.score)}")
    print(f"Best Streak: {yellow(snapshot.max_streak)}")
    print(f"Words: {snapshot.total_correct}/{snapshot.total_words}")
    print(f"Time Played: {green(format_duration(duration_seconds))}")
    print(f"Hints Used: {cyan(snapshot.hints_used)}")

    if report is None:
        print()
        print(red("⚠️  Progress could not be saved for this game."))
        return

    print(f"Experience: {yellow(f'+{report.experience_gained}')}")
    if report.leveled_up:
        print(green(bold(f"⬆️  LEVEL UP! You are now level {report.profile.level}")))

    if report.new_achievements:
        print()
        print(yellow("🏆 NEW ACHIEVEMENTS UNLOCKED!"))
        for achievement in report.new_achievements:
            print(f"{achievement.icon} {achievement.name}: {achievement.description}")


def render_statistics(profile: UserProfile) -> None:
    clear_screen()
    render_title("📊 YOUR STATISTICS")
    print(bold("Profile:"))
    print(
        f"Name: {green(profile.name)} | Level: {yellow(profile.level)}"
        f" | Experience: {cyan(profile.experience)}"
    )
    print()

    stats = profile.stats
    print(bold("Overall Stats:"))
    print(f"Games Played: {cyan(stats.total_games_played)}")
    print(f"Words Attempted: {green(stats.total_words_guessed)}")
    print(f"Average Score: {yellow(stats.average_score)}")
    print(f"Best Streak: {cyan(stats.best_streak)}")
    print(f"Accuracy: {green(f'{stats.accuracy_percentage}%')}")
    print(f"Time Played: {cyan(f'{stats.time_played_seconds // 60} minutes')}")
    print(f"Favorite Mode: {yellow(stats.favorite_mode.label)}")
    print()

    print(bold("By Word Difficulty:"))
    for level in DifficultyLevel.ordered():
        ws = stats.word_stats[level]
        name = DIFFICULTY_COLORS[level](f"{level.label}:".ljust(13))
        print(
            f"{name} {ws.played} words, {ws.correct} correct ({ws.accuracy}%),"
            f" avg {ws.average_time_seconds}s"
        )


def render_achievements(unlocked: list[Achievement], locked: list[Achievement]) -> None:
    clear_screen()
    render_title("🏆 YOUR ACHIEVEMENTS")
    if unlocked:
        print(green("✅ Unlocked:"))
        for a in unlocked:
            when = a.unlocked_at.strftime("%Y-%m-%d") if a.unlocked_at else ""
            print(f"{a.icon} {green(a.name)}: {a.description} {dim(when)}")
        print()
    if locked:
        print(dim("🔒 Locked:"))
        for a in locked:
            print(f"{a.icon} {dim(a.name)}: {a.description}")


def render_help() -> None:
    clear_screen()
    render_title("❓ HELP & TUTORIAL")
    print(bold("How to Play:"))
    print("1. You'll see an IPA transcription like /kæt/")
    print('2. Type the English word that matches the pronunciation ("cat" in this case)')
    print("3. Press Enter to submit your answer")
    print('4. Type "hint" to reveal example words for each sound')
    print('5. Type "quit" to end the game early')
    print()
    print(bold("Game Modes:"))
    print("Classic: 3 attempts per word, play as long as you like")
    print("Time Attack: 1 attempt per word, score as much as you can before time runs out")
    print("Streak Challenges: 1 attempt per word, win by reaching the target streak")


def render_settings() -> None:
    clear_screen()
    render_title("⚙️  SETTINGS")
    print("1. Change Player Name")
    print("2. Reset All Progress")
    print("3. Export Progress")
    print("4. Back to Menu")


def render_goodbye() -> None:
    print()
    print(cyan("👋 Thanks for playing IPA Translation Master!"))
    print(yellow("Keep practicing those translations! 🎯"))

"""
Treasure Hunt Narrative - Story text shown to the player.
"""

WELCOME = (
    "Welcome, brave adventurer! You stand in the center of an ancient dungeon. "
    "Three mystical relics await discovery, but danger lurks in every shadow. "
    "Use the directional controls to explore, but beware of traps that could "
    "end your quest. May fortune favor your journey!"
)

WELCOME_BACK = "Welcome back, brave adventurer! A new dungeon awaits your exploration."

RELIC_FOUND = (
    "You've discovered a Relic Chest! Ancient magic emanates from within. "
    "Solve the puzzle to claim your reward."
)

TRAP_DEATH = "Your health has been depleted. The darkness claims you... Game Over!"

EVENT_DEATH = "Your health has been depleted. Game Over!"

FINAL_OPEN = (
    "THE FINAL TREASURE CHEST! The ultimate prize awaits those clever "
    "enough to solve the master puzzle."
)

FINAL_SOLVED = (
    "EXCELLENT! One more challenge awaits. Solve this bonus riddle to "
    "claim the ultimate rewards!"
)

VICTORY = (
    "ULTIMATE VICTORY! You have conquered all challenges and earned the "
    "title of Legendary Treasure Hunter!"
)

WRONG_ANSWER = (
    "Incorrect answer! The ancient magic punishes failure. "
    "Lost {penalty} health. Try again?"
)

WRONG_ANSWER_FATAL = "Incorrect answer! Your final mistake... Game Over!"

PUZZLE_DISMISSED = "You step back from the puzzle. The chest remains sealed."


def trap_triggered(damage: int) -> str:
    return (
        "TRAP ACTIVATED! The room fills with poison gas. "
        f"You lose {damage} health!"
    )


def final_sealed(collected: int, required: int) -> str:
    return (
        "A magnificent treasure chest sits before you, but ancient magic keeps "
        f"it sealed. You need all {required} relics to unlock it. "
        f"({collected}/{required} collected)"
    )


def relic_claimed(gold: int, experience: int, collected: int, required: int) -> str:
    return (
        "Puzzle solved! You've claimed a mystical relic! "
        f"Gained {gold} gold, {experience} XP, and restored health. "
        f"({collected}/{required} relics collected)"
    )

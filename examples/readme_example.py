from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

import numpy as np

from deepclone import deep_copy, immutable


class TaskStatus(Enum):
    PENDING = "pending"
    COMPLETED = "completed"


@immutable
@dataclass(frozen=True)
class Budget:
    amount: Decimal
    currency: str


@dataclass(eq=False)
class Task:
    description: str
    status: TaskStatus
    budget: Budget
    blocked_by: list["Task"] = field(default_factory=list)
    on_done: object = None


@dataclass(eq=False)
class Board:
    """Tasks plus a grid view that references the same task objects."""

    tasks: list[Task]
    grid: np.ndarray


def build_board() -> Board:
    shared_budget = Budget(Decimal("100.00"), "EUR")
    write = Task("write", TaskStatus.PENDING, shared_budget)
    review = Task("review", TaskStatus.PENDING, shared_budget, blocked_by=[write])
    write.blocked_by.append(review)  # cycle
    write.on_done = lambda: print("done")

    grid = np.empty((2, 2), dtype=object)
    grid[0, 0] = grid[1, 1] = write
    grid[0, 1] = grid[1, 0] = review
    return Board(tasks=[write, review], grid=grid)


def main() -> None:
    board = build_board()
    clone = deep_copy(board)

    write, review = clone.tasks
    print("Task objects copied:", write is not board.tasks[0])
    print("Cycle preserved:", write.blocked_by[0].blocked_by[0] is write)
    print("Grid shares copied tasks:", clone.grid[0, 0] is write and clone.grid[1, 0] is review)
    print("Immutable budget shared:", write.budget is board.tasks[0].budget)
    print("Callback dropped:", write.on_done is None)

    write.status = TaskStatus.COMPLETED
    print("Original untouched:", board.tasks[0].status is TaskStatus.PENDING)


if __name__ == "__main__":
    main()

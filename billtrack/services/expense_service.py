from __future__ import annotations
from datetime import date
from typing import List, Optional

from billtrack.engine.expenses import ExpenseSummary, summarize_expenses
from billtrack.models.expense import Expense
from billtrack.services.base import RepoService, hydrate


class ExpenseService(RepoService):
    filename = "expenses.json"
    entity_name = "expense"

    def list_expenses(self, owner_id: str) -> List[Expense]:
        expenses = hydrate(self.repo.list_for_owner(owner_id), Expense)
        return sorted(expenses, key=lambda e: e.date, reverse=True)

    def add_expense(self, e: Expense) -> Expense:
        self.repo.add(e)
        return e

    def update_expense(self, e: Expense) -> Expense:
        e.touch()
        self.repo.update(e)
        return e

    def delete_expense(self, owner_id: str, expense_id: str) -> bool:
        return self.repo.delete_where(
            lambda d: d.get("id") == expense_id and d.get("owner_id") == owner_id
        ) > 0

    def summary(self, owner_id: str, today: Optional[date] = None) -> ExpenseSummary:
        return summarize_expenses(self.list_expenses(owner_id), today or date.today())

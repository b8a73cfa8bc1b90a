"""Helper utilities for tests."""

import json
import re
from datetime import datetime
from decimal import Decimal
from typing import Dict, Optional
import httpx
from services.session import build_basic_auth_header


class MemoryStorage:
    """In-memory stand-in for StorageManager."""

    def __init__(self, data: Optional[Dict[str, str]] = None):
        self.data = dict(data or {})

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value

    def remove(self, key):
        self.data.pop(key, None)

    def clear(self):
        self.data.clear()


def _money(value) -> str:
    # The backend serializes BigDecimal; send strings to exercise parsing
    return f"{Decimal(str(value)):.2f}"


class FakeBackend:
    """Small in-memory imitation of the finance REST API.

    Accepts HTTP Basic credentials from ``users``, assigns ids, and computes
    each budget's ``spent`` from its linked EXPENSE transactions.
    """

    def __init__(self, users: Optional[Dict[str, str]] = None):
        self.users = users or {"alice": "secret"}
        self.budgets: Dict[int, dict] = {}
        self.transactions: Dict[int, dict] = {}
        self.requests = []
        self._next_id = 1
        self._forced = []

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def fail_next(self, status_code: int, body=None, exception=None):
        """Make the next request fail with a status (or raise an exception)."""
        self._forced.append((status_code, body, exception))

    def add_budget(self, name, category, amount, spent=None) -> int:
        budget_id = self._take_id()
        self.budgets[budget_id] = {
            "id": budget_id,
            "name": name,
            "category": category,
            "amount": Decimal(str(amount)),
            "fixed_spent": None if spent is None else Decimal(str(spent)),
        }
        return budget_id

    def add_transaction(
        self, description, amount, category, type, when="2024-01-15T10:00:00", budget_id=None
    ) -> int:
        transaction_id = self._take_id()
        self.transactions[transaction_id] = {
            "id": transaction_id,
            "description": description,
            "amount": Decimal(str(amount)),
            "category": category,
            "transactionDate": when,
            "type": type,
            "budgetId": budget_id,
        }
        return transaction_id

    def _take_id(self) -> int:
        value = self._next_id
        self._next_id += 1
        return value

    # Serialization

    def _spent(self, budget) -> Decimal:
        if budget["fixed_spent"] is not None:
            return budget["fixed_spent"]
        return sum(
            (
                t["amount"]
                for t in self.transactions.values()
                if t["budgetId"] == budget["id"] and t["type"] == "EXPENSE"
            ),
            Decimal("0"),
        )

    def _budget_json(self, budget) -> dict:
        return {
            "id": budget["id"],
            "name": budget["name"],
            "category": budget["category"],
            "amount": _money(budget["amount"]),
            "spent": _money(self._spent(budget)),
        }

    def _transaction_json(self, transaction) -> dict:
        data = dict(transaction)
        data["amount"] = _money(transaction["amount"])
        data["receiptUrl"] = transaction.get("receiptUrl")
        return data

    # Request handling

    def _authorized(self, request) -> bool:
        header = request.headers.get("Authorization")
        return any(
            header == build_basic_auth_header(user, password)
            for user, password in self.users.items()
        )

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if self._forced:
            status_code, body, exception = self._forced.pop(0)
            if exception is not None:
                raise exception("forced failure", request=request)
            if isinstance(body, str):
                return httpx.Response(status_code, text=body)
            return httpx.Response(status_code, json=body)

        if not self._authorized(request):
            return httpx.Response(401, json={"error": "Unauthorized"})

        method = request.method
        path = request.url.path

        if path == "/api/test" and method == "GET":
            return httpx.Response(200, text="Backend is reachable")

        if path.startswith("/api/budgets"):
            return self._handle_budgets(request, method, path)
        if path.startswith("/api/transactions"):
            return self._handle_transactions(request, method, path)

        return httpx.Response(404, json={"message": "No such endpoint"})

    def _handle_budgets(self, request, method, path):
        if path == "/api/budgets" and method == "GET":
            return httpx.Response(
                200, json=[self._budget_json(b) for b in self.budgets.values()]
            )

        if path == "/api/budgets" and method == "POST":
            body = json.loads(request.content)
            if "id" in body or "spent" in body:
                return httpx.Response(400, json={"message": "read-only field sent"})
            budget_id = self.add_budget(body["name"], body["category"], body["amount"])
            return httpx.Response(200, json=self._budget_json(self.budgets[budget_id]))

        if path == "/api/budgets/summary" and method == "GET":
            budgets = list(self.budgets.values())
            budgeted = sum((b["amount"] for b in budgets), Decimal("0"))
            spent = sum((self._spent(b) for b in budgets), Decimal("0"))
            return httpx.Response(
                200,
                json={
                    "totalBudgeted": _money(budgeted),
                    "totalSpent": _money(spent),
                    "totalRemaining": _money(budgeted - spent),
                    "overBudgetCount": sum(
                        1 for b in budgets if self._spent(b) > b["amount"]
                    ),
                    "totalBudgets": len(budgets),
                },
            )

        match = re.fullmatch(r"/api/budgets/(\d+)", path)
        if match:
            budget = self.budgets.get(int(match.group(1)))
            if budget is None:
                return httpx.Response(404)
            if method == "GET":
                return httpx.Response(200, json=self._budget_json(budget))
            if method == "PUT":
                body = json.loads(request.content)
                budget["name"] = body["name"]
                budget["category"] = body["category"]
                budget["amount"] = Decimal(str(body["amount"]))
                return httpx.Response(200, json=self._budget_json(budget))
            if method == "DELETE":
                del self.budgets[budget["id"]]
                return httpx.Response(204)

        return httpx.Response(405)

    def _list_transactions(self, predicate):
        return httpx.Response(
            200,
            json=[
                self._transaction_json(t)
                for t in self.transactions.values()
                if predicate(t)
            ],
        )

    def _handle_transactions(self, request, method, path):
        if path == "/api/transactions" and method == "GET":
            return self._list_transactions(lambda t: True)

        if path == "/api/transactions" and method == "POST":
            body = json.loads(request.content)
            if "id" in body:
                return httpx.Response(400, json={"message": "read-only field sent"})
            transaction_id = self.add_transaction(
                body["description"],
                body["amount"],
                body["category"],
                body["type"],
                when=body["transactionDate"],
                budget_id=body.get("budgetId"),
            )
            if body.get("receiptUrl"):
                self.transactions[transaction_id]["receiptUrl"] = body["receiptUrl"]
            return httpx.Response(
                200, json=self._transaction_json(self.transactions[transaction_id])
            )

        if path == "/api/transactions/date-range" and method == "GET":
            start = datetime.fromisoformat(request.url.params["start"])
            end = datetime.fromisoformat(request.url.params["end"])
            return self._list_transactions(
                lambda t: start <= datetime.fromisoformat(t["transactionDate"]) <= end
            )

        match = re.fullmatch(r"/api/transactions/category/(.+)", path)
        if match:
            category = match.group(1)
            return self._list_transactions(lambda t: t["category"] == category)

        match = re.fullmatch(r"/api/transactions/budget/(\d+)", path)
        if match:
            budget_id = int(match.group(1))
            return self._list_transactions(lambda t: t["budgetId"] == budget_id)

        match = re.fullmatch(r"/api/transactions/type/(\w+)", path)
        if match:
            kind = match.group(1)
            return self._list_transactions(lambda t: t["type"] == kind)

        match = re.fullmatch(r"/api/transactions/(\d+)", path)
        if match:
            transaction = self.transactions.get(int(match.group(1)))
            if transaction is None:
                return httpx.Response(404, json={"message": "Transaction not found"})
            if method == "GET":
                return httpx.Response(200, json=self._transaction_json(transaction))
            if method == "PUT":
                body = json.loads(request.content)
                transaction.update(
                    description=body["description"],
                    amount=Decimal(str(body["amount"])),
                    category=body["category"],
                    transactionDate=body["transactionDate"],
                    type=body["type"],
                    budgetId=body.get("budgetId"),
                )
                return httpx.Response(200, json=self._transaction_json(transaction))
            if method == "DELETE":
                del self.transactions[transaction["id"]]
                return httpx.Response(204)

        return httpx.Response(405)

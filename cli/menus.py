"""
Interactive Shell

Nested menus: main -> cocktails / inventory / fest -> actions.
Every action reads from the repository, calls the pure services and
renders the result. Recoverable errors are printed and the main menu is
shown again.
"""

import logging
import sqlite3
from typing import Callable, Dict, List, Tuple

import pandas as pd
from pydantic import ValidationError as PydanticValidationError

from cli.config import Settings
from cli.prompts import Prompter, euros
from festplan.errors import EndOfInput, FestplanError, ValidationError
from festplan.models.cocktails import Cocktail
from festplan.services.ratio_advisor import advise_ratio
from festplan.services.shopping_list import compute_shopping_list
from festplan.services.valuation import inventory_value
from festplan.storage import sqlite_repo as repo

logger = logging.getLogger(__name__)

RECOVERABLE_ERRORS = (FestplanError, sqlite3.Error, PydanticValidationError)

Action = Callable[[], None]


class Shell:
    """Menu loop bound to one settings object and one prompter."""

    def __init__(self, settings: Settings, prompter: Prompter):
        self.settings = settings
        self.io = prompter
        self.db_path = settings.database

    # =========================================================================
    # Loop
    # =========================================================================

    def run(self):
        """Show the main menu until the user quits or input ends."""
        while True:
            try:
                if not self.main_menu():
                    return
                self.io.write("\nWhat do you want to do next?\n")
            except EndOfInput:
                self.io.write()
                return
            except RECOVERABLE_ERRORS as e:
                logger.warning(f"Action failed: {e}")
                self.io.write(f"\n{_describe(e)}\n")

    def _menu(self, entries: List[Tuple[str, str, Action]]) -> bool:
        """Show a submenu and run the chosen action. Enter goes back."""
        for key, label, _ in entries:
            self.io.write(f"{label} [{key}]")
        self.io.write("main menu [press enter]")

        actions: Dict[str, Action] = {key: action for key, _, action in entries}
        choice = self.io.ask("Choice: ")
        if choice == "":
            return True
        if choice not in actions:
            raise ValidationError(f"{choice} is not a valid choice")
        actions[choice]()
        return True

    def main_menu(self) -> bool:
        """Returns False when the user quits."""
        self.io.write("add/delete/alter/… cocktails [c]")
        self.io.write("modify/print inventory [i]")
        self.io.write("modify/print fest [f]")
        self.io.write("quit [q]")

        choice = self.io.ask("Choice: ")
        if choice == "q":
            return False
        if choice == "c":
            return self.cocktail_menu()
        if choice == "i":
            return self.inventory_menu()
        if choice == "f":
            return self.fest_menu()
        raise ValidationError("No valid choice, try again…")

    def cocktail_menu(self) -> bool:
        return self._menu([
            ("c", "create cocktail", self.create_cocktail),
            ("l", "list cocktails", self.show_cocktails),
            ("a", "alter cocktail", self.alter_cocktail),
        ])

    def inventory_menu(self) -> bool:
        return self._menu([
            ("l", "list inventory", self.list_inventory),
            ("v", "query inventory value", self.show_inventory_value),
            ("i", "add item", self.add_inventory),
            ("a", "change availability", self.update_availability),
            ("p", "change price", self.update_price),
        ])

    def fest_menu(self) -> bool:
        return self._menu([
            ("c", "show current fest", self.current_fest),
            ("a", "alter current selection", self.alter_selection),
            ("g", "generate shopping list", self.shopping_list),
            ("l", "show last fests", self.past_fests),
        ])

    # =========================================================================
    # Cocktails
    # =========================================================================

    def _cocktail_names(self) -> List[str]:
        return [c.name for c in repo.list_cocktails(db_path=self.db_path)]

    def create_cocktail(self):
        name = self.io.ask("Name: ")

        ingredients = [line.name for line in repo.list_inventory(db_path=self.db_path)]
        self.io.write("Currently available ingredients:")
        self.io.numbered(ingredients)

        choice = self.io.split_choice(
            f"Select the ingredients of {name} [numbers or new names, separate with ',', q to quit]: "
        )
        if not choice or "q" in choice:
            raise ValidationError("No cocktail created")

        cocktail = Cocktail(name=name)
        for token in choice:
            if token.isdigit():
                index = int(token)
                if index >= len(ingredients):
                    raise ValidationError(f"{index} is not a valid ingredient number")
                ingredient = ingredients[index]
            else:
                ingredient = token
            amount = self.io.get_float(f"amount for {ingredient} [l]: ")
            cocktail = cocktail.with_ingredient(ingredient, amount)

        repo.insert_cocktail(cocktail, db_path=self.db_path)
        self.io.write(f"Created {cocktail.name}.")

    def show_cocktails(self):
        names = self._cocktail_names()
        self.io.write("Currently available cocktails:")
        self.io.numbered(names)

        name = self.io.choose(names, "Investigate further? Choose a cocktail: ")
        cocktail = repo.get_cocktail(name, db_path=self.db_path)

        self.io.write(f"Ingredients for {cocktail.name}:")
        self.io.table(pd.DataFrame(
            [{"ingredient": k, "amount [l]": v} for k, v in sorted(cocktail.ingredients.items())],
            columns=["ingredient", "amount [l]"],
        ))

    def alter_cocktail(self):
        names = self._cocktail_names()
        self.io.write("Currently available cocktails:")
        self.io.numbered(names)

        what = self.io.ask("Alter [n]ame or [i]ngredients? ")
        if what not in ("n", "i"):
            raise ValidationError(f"{what} is not a valid choice")

        name = self.io.choose(names, "Which one would you like to alter? ")
        if what == "n":
            new_name = self.io.ask(f"What is {name} actually called? ")
            repo.rename_cocktail(name, new_name, db_path=self.db_path)
            return

        cocktail = repo.get_cocktail(name, db_path=self.db_path)
        ingredients = sorted(cocktail.ingredients)
        self.io.write(f"Current ingredients for {name}:")
        for i, ingredient in enumerate(ingredients):
            self.io.write(f"{i} {ingredient}\t{cocktail.ingredients[ingredient]:.2f} l")

        ingredient = self.io.choose(ingredients, "Which ingredient do you want to alter? ")
        amount = self.io.get_float(f"How much {ingredient} is actually needed [l]? ")
        repo.update_cocktail_ingredient(name, ingredient, amount, db_path=self.db_path)

    # =========================================================================
    # Inventory
    # =========================================================================

    def list_inventory(self):
        lines = repo.list_inventory(db_path=self.db_path)
        self.io.table(pd.DataFrame(
            [
                {"ingredient": line.name, "available [l]": line.available, "price [€/l]": line.price / 100}
                for line in lines
            ],
            columns=["ingredient", "available [l]", "price [€/l]"],
        ))

    def show_inventory_value(self):
        stock = repo.get_stock(db_path=self.db_path)
        prices = repo.get_prices(db_path=self.db_path)
        self.io.write(f"Current inventory value: {euros(inventory_value(stock, prices))}")

    def add_inventory(self):
        name = self.io.ask("name of ingredient: ")
        price = self.io.get_int("price [ct/l]: ")
        repo.add_inventory_item(name, price=price, db_path=self.db_path)

    def _pick_ingredient(self, shown: Callable) -> str:
        lines = repo.list_inventory(db_path=self.db_path)
        for i, line in enumerate(lines):
            self.io.write(f"{i}: {line.name}\t{shown(line)}")
        return self.io.choose([line.name for line in lines], "Which item do you want to update? ")

    def update_availability(self):
        name = self._pick_ingredient(lambda line: f"{line.available:.2f} l")
        available = self.io.get_float("How much is available? [l]: ")
        repo.set_availability(name, available, db_path=self.db_path)

    def update_price(self):
        name = self._pick_ingredient(lambda line: euros(line.price))
        price = self.io.get_int("What is the current price? [ct]: ")
        repo.set_price(name, price, db_path=self.db_path)

    # =========================================================================
    # Fest
    # =========================================================================

    def _show_selection(self):
        fest = repo.get_fest(self.settings.current, db_path=self.db_path)
        self.io.write(f"Current selection for {fest.date}:")
        self.io.table(fest.to_dataframe())
        return fest

    def current_fest(self):
        fest = self._show_selection()
        advice = advise_ratio(fest.planned_counts, self.settings.awaited)

        self.io.write(
            f"You are currently planning for {advice.total_planned} cocktails and "
            f"{advice.expected_guests} guests. That makes for {advice.ratio:.2f} cocktails/guest"
        )
        self.io.write(advice.message)

    def alter_selection(self):
        fest = self._show_selection()
        what = self.io.ask("Do you want to [a]dd, [c]hange or [d]eselect a cocktail? ")

        if what == "d":
            name = self.io.choose(fest.cocktail_names, "Which cocktail do you want to deselect? ")
            repo.set_fest_cocktail(fest.date, name, delete=True, db_path=self.db_path)
        elif what == "c":
            name = self.io.choose(fest.cocktail_names, "Which cocktail do you want to change? ")
            self._plan_cocktail(fest.date, name)
        elif what == "a":
            available = [n for n in self._cocktail_names() if n not in fest.cocktails]
            self.io.write("Choose cocktails. Available:")
            self.io.numbered(available)

            chosen = []
            for token in self.io.split_choice("Separate choice with ',': "):
                try:
                    index = int(token)
                except ValueError:
                    raise ValidationError(f"{token!r} is not a whole number")
                if not 0 <= index < len(available):
                    raise ValidationError(f"{index} is not a valid number")
                chosen.append(available[index])

            for name in chosen:
                self._plan_cocktail(fest.date, name)
        else:
            raise ValidationError(f"{what} is not a valid choice")

    def _plan_cocktail(self, fest_date: str, name: str):
        amount = self.io.get_int(f"How many {name} are you planning for? ")
        price = self.io.get_int(f"What's the price for a {name} [ct]? ")
        repo.set_fest_cocktail(fest_date, name, price=price, amount=amount, db_path=self.db_path)

    def shopping_list(self):
        # All reads first: a failed read aborts before anything is computed
        cocktails = repo.list_cocktails(db_path=self.db_path)
        stock = repo.get_stock(db_path=self.db_path)
        fest = repo.get_fest(self.settings.current, db_path=self.db_path)
        prices = repo.get_prices(db_path=self.db_path)

        result = compute_shopping_list(cocktails, stock, fest.planned_counts, prices)

        self.io.table(result.to_dataframe())
        self.io.write(f"Total: {euros(result.total_cost)}")

    def past_fests(self):
        dates = repo.list_fest_dates(db_path=self.db_path)
        self.io.write("Select a fest. Currently available:")
        self.io.numbered(dates)

        date = self.io.choose(dates, "Which fest do you want to see? ")
        fest = repo.get_fest(date, db_path=self.db_path)
        self.io.table(fest.to_dataframe())


def _describe(error: Exception) -> str:
    if isinstance(error, FestplanError):
        return error.message
    if isinstance(error, PydanticValidationError):
        return "; ".join(err["msg"] for err in error.errors())
    return f"Database error: {error}"

import unittest
from datetime import date

from mealplan.domain.Meal import MealType, new_meal
from mealplan.domain.MealPlan import MealPlan
from mealplan.domain.errors import EmptyField, InvalidDay, MealNotFound
from mealplan.logic.reconciliation import Applied, NeedsConfirmation, add_meal, edit_meal, remove_meal

WEEK = date(2024, 1, 7)
MONDAY = date(2024, 1, 8)


class TestAddMeal(unittest.TestCase):

    def setUp(self):
        self.bacon = new_meal(MealType.BREAKFAST, MONDAY, "Erik", "Bacon and Eggs")
        self.plan = MealPlan(WEEK, [self.bacon])

    def test_add_to_empty_plan(self):
        outcome = add_meal(MealPlan(WEEK), self.bacon)
        self.assertIsInstance(outcome, Applied)
        self.assertEqual(outcome.plan.sorted_meals(), [self.bacon])

    def test_duplicate_needs_confirmation(self):
        benedict = new_meal(MealType.BREAKFAST, MONDAY, "Erik", "Eggs Benedict")
        outcome = add_meal(self.plan, benedict)
        self.assertIsInstance(outcome, NeedsConfirmation)
        self.assertEqual(outcome.conflict, self.bacon)
        self.assertIn("Bacon and Eggs", outcome.message)
        self.assertEqual(len(self.plan), 1)

    def test_confirmed_duplicate_is_inserted(self):
        benedict = new_meal(MealType.BREAKFAST, MONDAY, "Erik", "Eggs Benedict")
        outcome = add_meal(self.plan, benedict, confirmed=True)
        self.assertIsInstance(outcome, Applied)
        descriptions = [m.description for m in outcome.plan.find_meals(MealType.BREAKFAST, MONDAY)]
        self.assertEqual(descriptions, ["Bacon and Eggs", "Eggs Benedict"])
        # input plan untouched
        self.assertEqual(len(self.plan), 1)

    def test_confirmed_replace(self):
        benedict = new_meal(MealType.BREAKFAST, MONDAY, "Erik", "Eggs Benedict")
        outcome = add_meal(self.plan, benedict, confirmed=True, replace=True)
        self.assertEqual(outcome.previous, self.bacon)
        self.assertEqual(outcome.plan.sorted_meals(), [benedict])

    def test_day_outside_week(self):
        meal = new_meal(MealType.LUNCH, date(2024, 1, 14), "Anna", "Soup")
        with self.assertRaises(InvalidDay):
            add_meal(self.plan, meal)

    def test_past_dates_only_rejected_when_enabled(self):
        meal = new_meal(MealType.LUNCH, MONDAY, "Anna", "Soup")
        today = date(2024, 1, 10)
        self.assertIsInstance(add_meal(self.plan, meal, today=today), Applied)
        with self.assertRaises(InvalidDay):
            add_meal(self.plan, meal, today=today, reject_past_dates=True)


class TestEditMeal(unittest.TestCase):

    def setUp(self):
        self.plan = MealPlan(WEEK, [new_meal(MealType.BREAKFAST, MONDAY, "Erik", "Bacon and Eggs")])

    def test_edit_description_keeps_cook(self):
        outcome = edit_meal(self.plan, MealType.BREAKFAST, MONDAY, description="Eggs Benedict")
        meal = outcome.plan.find_meal(MealType.BREAKFAST, MONDAY)
        self.assertEqual((meal.cook, meal.description), ("Erik", "Eggs Benedict"))
        self.assertEqual(outcome.previous.description, "Bacon and Eggs")

    def test_edit_cook_only(self):
        outcome = edit_meal(self.plan, MealType.BREAKFAST, MONDAY, cook="Anna")
        self.assertEqual(outcome.meal.description, "Bacon and Eggs")
        self.assertEqual(outcome.meal.cook, "Anna")

    def test_edit_missing_meal(self):
        with self.assertRaises(MealNotFound):
            edit_meal(self.plan, MealType.DINNER, MONDAY, description="Tacos")

    def test_blank_edit_rejected(self):
        with self.assertRaises(EmptyField):
            edit_meal(self.plan, MealType.BREAKFAST, MONDAY, cook="  ")


class TestRemoveMeal(unittest.TestCase):

    def test_remove_missing(self):
        with self.assertRaises(MealNotFound):
            remove_meal(MealPlan(WEEK), MealType.LUNCH, MONDAY)

    def test_last_meal_needs_confirmation(self):
        plan = MealPlan(WEEK, [new_meal(MealType.LUNCH, MONDAY, "Anna", "Soup")])
        outcome = remove_meal(plan, MealType.LUNCH, MONDAY)
        self.assertIsInstance(outcome, NeedsConfirmation)
        self.assertIn("last meal", outcome.message)
        confirmed = remove_meal(plan, MealType.LUNCH, MONDAY, confirmed=True)
        self.assertTrue(confirmed.plan.is_empty())

    def test_remove_without_confirmation(self):
        plan = MealPlan(WEEK, [
            new_meal(MealType.LUNCH, MONDAY, "Anna", "Soup"),
            new_meal(MealType.DINNER, MONDAY, "Anna", "Tacos"),
        ])
        outcome = remove_meal(plan, MealType.LUNCH, MONDAY)
        self.assertIsInstance(outcome, Applied)
        self.assertEqual([m.meal_type for m in outcome.plan.meals], [MealType.DINNER])


if __name__ == '__main__':
    unittest.main()

import os
import tempfile
import textwrap
import unittest
from unittest.mock import patch

from conditional_validation import (
    ConditionalValidator,
    ConfigurationError,
    DictRecord,
    RecordValidator,
    ValidationStatus,
    build_rules,
    load_rules,
)
from conditional_validation.engine import default_rules_path
from conditional_validation.metrics import get_metrics, reset_metrics


def make_order(**overrides):
    attributes = {
        "reference": "ORD-1",
        "shipping_method": "express",
        "billing_city": "Auckland",
        "billing_country": "NZ",
        "billing_zip": "1010",
        "is_gift": False,
        "gift_message": None,
    }
    attributes.update(overrides)
    customer = DictRecord({"country": "NZ"})
    return DictRecord(attributes, relations={"customer": customer})


class TestRuleLoading(unittest.TestCase):
    def test_example_rules_load(self):
        rule_set = load_rules(default_rules_path())

        self.assertEqual(rule_set.version, "1.0")
        self.assertEqual(len(rule_set), 6)
        self.assertEqual(rule_set.attribute_names(),
                         ["reference", "shipping_method", "billing_zip", "gift_message"])
        self.assertIsInstance(rule_set.rules[2].validator, ConditionalValidator)

    def test_load_from_yaml_file(self):
        content = textwrap.dedent("""
            version: "2.1"
            rules:
              - attributes: [a, b]
                validator: required
        """)
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "rules.yaml")
            with open(path, "w", encoding="utf-8") as f:
                f.write(content)

            rule_set = load_rules(path)

        self.assertEqual(rule_set.version, "2.1")
        self.assertEqual(rule_set.rules[0].attributes, ("a", "b"))

    def test_rules_path_from_environment(self):
        with patch.dict("os.environ", {"CONDITIONAL_VALIDATION_RULES": str(default_rules_path())}):
            self.assertEqual(len(load_rules()), 6)

    def test_missing_rules(self):
        with self.assertRaises(FileNotFoundError):
            load_rules("/does/not/exist.yaml")
        with patch.dict("os.environ", {}, clear=True):
            with self.assertRaises(ConfigurationError):
                load_rules()

    def test_invalid_yaml(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "rules.yaml")
            with open(path, "w", encoding="utf-8") as f:
                f.write("rules: [unclosed")

            with self.assertRaises(ConfigurationError):
                load_rules(path)

    def test_malformed_rules(self):
        bad_rule_data = [
            None,
            {"rules": "required"},
            [{"validator": "required"}],
            [{"attributes": "a"}],
            [{"attributes": "customer.country", "validator": "required"}],
            [{"attributes": "a", "validator": "unknown"}],
            [{"attributes": "a", "validator": "conditional", "dependent_validations": {"b": []}}],
            ["required"],
            [{"attributes": "a", "validator": "required", True: "checkout"}],
        ]
        for data in bad_rule_data:
            with self.subTest(data=data):
                with self.assertRaises(ConfigurationError):
                    build_rules(data)


class TestRecordValidator(unittest.TestCase):
    def setUp(self):
        reset_metrics()
        self.validator = RecordValidator(rules_path=default_rules_path())

    def test_valid_order(self):
        result = self.validator.validate(make_order())

        self.assertEqual(result.status, ValidationStatus.PASS)
        self.assertEqual(result.errors, [])
        self.assertEqual(result.metadata["rules_version"], "1.0")

    def test_dependency_error_on_related_record(self):
        order = make_order()
        order.get_related("customer").set_attribute("country", "")

        result = self.validator.validate(order)

        self.assertEqual(result.errors_by_attribute(), {"shipping_method": ["Country cannot be blank."]})

    def test_primary_validation_after_dependencies_pass(self):
        result = self.validator.validate(make_order(shipping_method="drone"))

        self.assertEqual(result.errors_by_attribute(), {"shipping_method": ["Shipping Method is not in the list."]})

    def test_skipped_when_dependencies_fail(self):
        result = self.validator.validate(make_order(billing_city="", billing_zip="!!"))

        self.assertTrue(result.passed)

    def test_skip_on_error(self):
        result = self.validator.validate(make_order(reference=""))
        self.assertEqual(result.errors_by_attribute(), {"reference": ["Reference cannot be blank."]})

        result = self.validator.validate(make_order(reference="ABCDEFGHIJKLMNOP"))
        self.assertEqual(result.errors_by_attribute(),
                         {"reference": ["Reference is too long (maximum is 12 characters)."]})

    def test_scenario_rules(self):
        order = make_order(gift_message="Happy birthday")

        self.assertTrue(self.validator.validate(order).passed)

        result = self.validator.validate(order, scenario="checkout")
        self.assertEqual(result.errors_by_attribute(), {
            "gift_message": ["Gift Message can only be set on gift orders."],
        })
        self.assertEqual(result.metadata["scenario"], "checkout")

        self.assertTrue(self.validator.validate(make_order(gift_message="Hi", is_gift=True),
                                                scenario="checkout").passed)

    def test_checkout_without_gift_message(self):
        for order in (make_order(), make_order(is_gift=None), make_order(is_gift=True)):
            with self.subTest(is_gift=order.get_attribute("is_gift")):
                result = self.validator.validate(order, scenario="checkout")
                self.assertTrue(result.passed, result.errors_by_attribute())

    def test_gift_message_length_applies_to_every_scenario(self):
        order = make_order(gift_message="x" * 141, is_gift=True)

        for scenario in (None, "checkout"):
            with self.subTest(scenario=scenario):
                result = self.validator.validate(order, scenario=scenario)
                self.assertEqual(result.errors_by_attribute(), {
                    "gift_message": ["Gift Message is too long (maximum is 140 characters)."],
                })

    def test_attribute_filter(self):
        result = self.validator.validate(make_order(reference="", shipping_method="drone"),
                                         attributes=["shipping_method"])

        self.assertEqual(result.failed_attributes, ["shipping_method"])

    def test_existing_errors(self):
        order = make_order()
        order.add_error("reference", "Duplicate reference.")

        self.assertTrue(self.validator.validate(order).passed)

        order.add_error("reference", "Duplicate reference.")
        result = self.validator.validate(order, clear_errors=False)
        self.assertEqual(result.error_messages, ["Duplicate reference."])

    def test_configuration_errors_propagate(self):
        validator = RecordValidator(rules=[{
            "attributes": "a",
            "validator": "conditional",
            "dependent_validations": {"b": ["required"]},
        }], enable_metrics=False)
        # Break the map after the rule set was checked
        validator.rules.rules[0].validator.dependent_validations["c"] = []

        with self.assertRaises(ConfigurationError):
            validator.validate(DictRecord({"a": "x", "b": "y"}))

    def test_metrics(self):
        self.validator.validate(make_order())
        self.validator.validate(make_order(shipping_method="drone"))

        stats = get_metrics().export_json()
        self.assertEqual(stats["total_validations"], 2)
        self.assertEqual(stats["passed_validations"], 1)
        self.assertEqual(stats["errors_by_attribute"], {"shipping_method": 1})
        self.assertIn('conditional_validation_attribute_errors{attribute="shipping_method"} 1',
                      get_metrics().export_text())

    def test_metrics_disabled(self):
        validator = RecordValidator(rules_path=default_rules_path(), enable_metrics=False)
        validator.validate(make_order())

        self.assertEqual(get_metrics().export_json()["total_validations"], 0)

    def test_validate_batch(self):
        results = self.validator.validate_batch([make_order(), make_order(reference="")])

        self.assertEqual([r.passed for r in results], [True, False])


if __name__ == "__main__":
    unittest.main()

import unittest

from conditional_validation import ConfigurationError, DictRecord, format_message
from conditional_validation.models import (
    DependentValidation,
    ValidationResult,
    ValidationSpec,
    ValidationStatus,
    ValidationTarget,
    generate_attribute_label,
    parse_specs,
    split_attribute_key,
)


class TestDictRecord(unittest.TestCase):
    def test_attribute_labels(self):
        record = DictRecord({"shipping_method": "air"}, labels={"zip": "Postcode"})

        self.assertEqual(record.get_attribute_label("shipping_method"), "Shipping Method")
        self.assertEqual(record.get_attribute_label("zip"), "Postcode")
        self.assertEqual(generate_attribute_label("shippingMethod"), "Shipping Method")
        self.assertEqual(generate_attribute_label("customer_id"), "Customer Id")

    def test_missing_attribute_is_none(self):
        self.assertIsNone(DictRecord().get_attribute("anything"))

    def test_error_collection_keeps_order(self):
        record = DictRecord()
        record.add_error("b", "first")
        record.add_errors([("a", "second"), ("b", "third")])

        self.assertEqual(record.get_errors(), [("b", "first"), ("a", "second"), ("b", "third")])
        self.assertEqual(record.get_error("b"), "first")
        self.assertIsNone(record.get_error("c"))
        self.assertTrue(record.has_errors())
        self.assertTrue(record.has_errors("a"))
        self.assertFalse(record.has_errors("c"))

        record.clear_errors()
        self.assertEqual(record.get_errors(), [])
        self.assertFalse(record.has_errors())

    def test_get_errors_returns_a_copy(self):
        record = DictRecord()
        record.add_error("a", "message")

        snapshot = record.get_errors()
        snapshot.append(("b", "other"))

        self.assertEqual(record.get_errors(), [("a", "message")])

    def test_relations(self):
        customer = DictRecord({"country": "NZ"})
        order = DictRecord(relations={"customer": customer, "agent": None})

        self.assertIs(order.get_related("customer"), customer)
        self.assertIsNone(order.get_related("agent"))
        self.assertIsNone(order.get_related("unknown"))

    def test_from_dict(self):
        order = DictRecord.from_dict({
            "attributes": {"shipping_method": "air"},
            "labels": {"shipping_method": "Shipping"},
            "relations": {"customer": {"attributes": {"country": "NZ"}}, "agent": None},
        })

        self.assertEqual(order.get_attribute("shipping_method"), "air")
        self.assertEqual(order.get_attribute_label("shipping_method"), "Shipping")
        self.assertEqual(order.get_related("customer").get_attribute("country"), "NZ")
        self.assertIsNone(order.get_related("agent"))


class TestValidationSpec(unittest.TestCase):
    def test_definition_forms(self):
        self.assertEqual(ValidationSpec.parse("required"), ValidationSpec("required"))
        self.assertEqual(ValidationSpec.parse(["length", {"min": 3}]),
                         ValidationSpec("length", (), {"min": 3}))
        self.assertEqual(ValidationSpec.parse(("length", 3, 10)), ValidationSpec("length", (3, 10)))
        self.assertEqual(ValidationSpec.parse({"validator": "length", "min": 3}),
                         ValidationSpec("length", (), {"min": 3}))
        spec = ValidationSpec("in", (["a"],))
        self.assertIs(ValidationSpec.parse(spec), spec)

    def test_invalid_definitions(self):
        for definition in ([], [3], {"min": 3}, 42, None, "  "):
            with self.subTest(definition=definition):
                with self.assertRaises(ConfigurationError):
                    ValidationSpec.parse(definition)

    def test_parse_specs(self):
        self.assertEqual(parse_specs("required"), (ValidationSpec("required"),))
        self.assertEqual(parse_specs(["length", {"max": 3}]),
                         (ValidationSpec("length", (), {"max": 3}),))
        self.assertEqual(parse_specs([["required"], ["length", {"max": 3}]]),
                         (ValidationSpec("required"), ValidationSpec("length", (), {"max": 3})))

    def test_option_names_must_be_strings(self):
        for definition in ({"validator": "required", True: "checkout"}, ["length", {1: 3}]):
            with self.subTest(definition=definition):
                with self.assertRaises(ConfigurationError):
                    ValidationSpec.parse(definition)

    def test_specs_are_unhashable(self):
        spec = ValidationSpec.parse(["in", {"range": ["a", "b"]}])

        self.assertIsNone(ValidationSpec.__hash__)
        with self.assertRaises(TypeError):
            hash(spec)
        with self.assertRaises(TypeError):
            hash(DependentValidation.from_config("a", [spec]))

    def test_str(self):
        self.assertEqual(str(ValidationSpec("length", (3,), {"max": 5})), "length(3, max=5)")


class TestDependentValidation(unittest.TestCase):
    def test_split_attribute_key(self):
        self.assertEqual(split_attribute_key(" a , customer.country,b "), ("a", "customer.country", "b"))

    def test_invalid_attribute_keys(self):
        for key in ("", "a,,b", "a.b.c", ".a", "a.", 3):
            with self.subTest(key=key):
                with self.assertRaises(ConfigurationError):
                    split_attribute_key(key)

    def test_from_list(self):
        entry = DependentValidation.from_config("a, b", ["required", ["length", {"max": 2}]])

        self.assertEqual(entry.attributes, ("a", "b"))
        self.assertEqual([s.name for s in entry.specs], ["required", "length"])
        self.assertIsNone(entry.message)

    def test_from_mapping_with_message(self):
        entry = DependentValidation.from_config("a", {"validations": ["required"], "message": "Bad"})

        self.assertEqual(entry.message, "Bad")
        self.assertIs(DependentValidation.from_config("a", entry), entry)

    def test_empty_or_invalid_lists(self):
        for value in ([], (), "required", None, {"validations": []}, {"message": "x"}):
            with self.subTest(value=value):
                with self.assertRaises(ConfigurationError):
                    DependentValidation.from_config("a", value)


class TestValidationTarget(unittest.TestCase):
    def test_resolution(self):
        customer = DictRecord({"country": "NZ"})
        order = DictRecord(relations={"customer": customer, "agent": None})

        self.assertEqual(ValidationTarget.resolve(order, "reference"), ValidationTarget(order, "reference"))
        self.assertEqual(ValidationTarget.resolve(order, "customer.country"),
                         ValidationTarget(customer, "country"))
        self.assertIsNone(ValidationTarget.resolve(order, "agent.name"))


class TestMessages(unittest.TestCase):
    def test_format_message(self):
        params = {"{attribute}": "Country", "{value}": None, "{dependentAttribute}": "Zip"}

        self.assertEqual(format_message("{attribute} '{value}' / {dependentAttribute}", params),
                         "Country '' / Zip")
        self.assertEqual(format_message("no placeholders", params), "no placeholders")
        self.assertEqual(format_message("{attribute}", {}), "{attribute}")

    def test_substituted_values_are_not_rescanned(self):
        params = {"{attribute}": "{value}", "{value}": "x"}

        self.assertEqual(format_message("{attribute} {value}", params), "{value} x")


class TestValidationResult(unittest.TestCase):
    def test_from_errors(self):
        result = ValidationResult.from_errors([("a", "one"), ("b", "two"), ("a", "three")])

        self.assertEqual(result.status, ValidationStatus.FAIL)
        self.assertFalse(result.passed)
        self.assertEqual(result.failed_attributes, ["a", "b"])
        self.assertEqual(result.errors_by_attribute(), {"a": ["one", "three"], "b": ["two"]})
        self.assertEqual(result.to_dict()["errors"][0], {"attribute": "a", "message": "one"})

    def test_pass(self):
        result = ValidationResult.from_errors([])

        self.assertTrue(result.passed)
        self.assertEqual(result.to_dict()["status"], "PASS")


if __name__ == "__main__":
    unittest.main()

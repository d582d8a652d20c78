import unittest

from echoer.render.stringify import stringify, to_json


class StringifyTests(unittest.TestCase):
    def test_value_kinds(self) -> None:
        cases = [
            ("two", "two"),
            ("", ""),
            (3, "3"),
            (-7, "-7"),
            (2.5, "2.5"),
            (3.0, "3"),
            (float("nan"), "NaN"),
            (float("-inf"), "-Infinity"),
            (True, "true"),
            (False, "false"),
            (None, "null"),
            ({"a": 22}, '{"a":22}'),
            ([1, "x", {"b": None}], '[1,"x",{"b":null}]'),
            ((1, 2), "[1,2]"),
            ({"name": "čaj"}, '{"name":"čaj"}'),
        ]
        for value, expected in cases:
            with self.subTest(value=value):
                self.assertEqual(stringify(value), expected)

    def test_numbers_use_javascript_layout(self) -> None:
        cases = [
            (1e-7, "1e-7"),
            (1e-6, "0.000001"),
            (0.05, "0.05"),
            (-0.0, "0"),
            (123.456, "123.456"),
            (1e16, "10000000000000000"),
            (1.5e21, "1.5e+21"),
            (1e300, "1e+300"),
            (-2.5e-8, "-2.5e-8"),
        ]
        for value, expected in cases:
            with self.subTest(value=value):
                self.assertEqual(stringify(value), expected)

    def test_non_finite_floats_in_containers_become_null(self) -> None:
        self.assertEqual(stringify({"a": float("nan")}), '{"a":null}')
        self.assertEqual(stringify([float("inf"), 2.0, 0.5]), "[null,2,0.5]")

    def test_shared_value_is_not_a_cycle(self) -> None:
        shared = {"x": 1}
        self.assertEqual(stringify([shared, shared]), '[{"x":1},{"x":1}]')

    def test_cycle_raises(self) -> None:
        loop = []
        loop.append(loop)
        with self.assertRaises(ValueError):
            stringify(loop)

    def test_unserializable_raises(self) -> None:
        with self.assertRaises(TypeError):
            stringify(object())

    def test_pretty_json(self) -> None:
        self.assertEqual(to_json({"a": [1]}, indent=2), '{\n  "a": [\n    1\n  ]\n}')


if __name__ == "__main__":
    unittest.main()

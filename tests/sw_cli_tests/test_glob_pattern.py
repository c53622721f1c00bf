import os
import unittest

from sw_cli.build import compile_patterns, matches_any
from sw_cli.glob_pattern import generate_glob_pattern, normalize_extensions


class GenerateGlobPatternTests(unittest.TestCase):
    def test_single_extension_has_no_braces(self):
        self.assertEqual(generate_glob_pattern("./build/", ["js"]), "./build/**/*.js")

    def test_several_extensions_use_braces_in_given_order(self):
        self.assertEqual(generate_glob_pattern("./build/", ["js", "css"]), "./build/**/*.{js,css}")

    def test_current_directory_root(self):
        self.assertEqual(generate_glob_pattern("./", ["html"]), os.path.join("./", "**", "*") + ".html")

    def test_duplicates_and_leading_dots_are_dropped(self):
        self.assertEqual(generate_glob_pattern("./a/", [".js", "js", "css", " "]), "./a/**/*.{js,css}")

    def test_empty_extensions_raise(self):
        with self.assertRaises(ValueError):
            generate_glob_pattern("./a/", [])

    def test_is_deterministic(self):
        self.assertEqual(
            generate_glob_pattern("./a/", ("png", "svg")),
            generate_glob_pattern("./a/", ("png", "svg")),
        )

    def test_normalize_extensions(self):
        self.assertEqual(normalize_extensions([".HTML", "html", "js"]), ["HTML", "html", "js"])


class GlobPatternMatchingTests(unittest.TestCase):
    """The built pattern selects all and only the requested files under the root."""

    def setUp(self):
        self.compiled = compile_patterns([generate_glob_pattern("./build/", ["js", "css"])])

    def test_matches_requested_extensions_at_any_depth(self):
        for path in ("build/app.js", "build/styles/site.css", "./build/a/b/c.js"):
            with self.subTest(path=path):
                self.assertTrue(matches_any(path, self.compiled))

    def test_rejects_other_extensions_and_other_roots(self):
        for path in ("build/index.html", "build/app.jsx", "build/app.js.map", "src/app.js", "buildx/app.js"):
            with self.subTest(path=path):
                self.assertFalse(matches_any(path, self.compiled))


if __name__ == "__main__":
    unittest.main()

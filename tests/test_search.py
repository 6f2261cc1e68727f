import unittest

from daisy.modules.blog.domain.models import BlogEntry
from daisy.modules.blog.domain.search import extract_keywords, search_entries


def entry(entry_id, plants=(), symptoms=()):
    return BlogEntry(
        id=entry_id,
        id_user="user-1",
        title=f"Entry {entry_id}",
        plants=list(plants),
        symptoms=list(symptoms),
    )


class ExtractKeywordsTests(unittest.TestCase):
    def test_keywords_are_lowercased_and_accent_stripped(self):
        self.assertEqual(extract_keywords("  Tulipán  HOJAS amarillas "), ["tulipan", "hojas", "amarillas"])

    def test_blank_filter_gives_one_empty_keyword(self):
        self.assertEqual(extract_keywords("   "), [""])
        self.assertEqual(extract_keywords(""), [""])


class SearchEntriesTests(unittest.TestCase):
    def setUp(self):
        self.rosa = entry("1", plants=["Rosa"], symptoms=["manchas negras"])
        self.tulipan = entry("2", plants=["Tulipán"], symptoms=["hojas secas"])
        self.cafe = entry("3", plants=["café"], symptoms=["roya"])

    def test_matches_only_entries_with_keyword(self):
        self.assertEqual(search_entries("rosa", [self.rosa, self.tulipan]), [self.rosa])

    def test_accent_insensitive(self):
        self.assertEqual(search_entries("cafe", [self.rosa, self.cafe]), [self.cafe])
        self.assertEqual(search_entries("tulipan", [self.rosa, self.tulipan]), [self.tulipan])

    def test_case_insensitive(self):
        lower = entry("4", plants=["rosa"])
        self.assertEqual(search_entries("ROSA", [lower, self.tulipan]), [lower])

    def test_symptom_tags_are_searched(self):
        self.assertEqual(search_entries("secas", [self.rosa, self.tulipan, self.cafe]), [self.tulipan])

    def test_substring_match(self):
        self.assertEqual(search_entries("manch", [self.rosa, self.tulipan]), [self.rosa])

    def test_any_keyword_is_enough_and_order_is_kept(self):
        entries = [self.cafe, self.tulipan, self.rosa]
        self.assertEqual(search_entries("rosa roya", entries), [self.cafe, self.rosa])

    def test_blank_filter_matches_everything(self):
        entries = [self.rosa, self.tulipan, self.cafe]
        self.assertEqual(search_entries("   ", entries), entries)

    def test_no_match_gives_empty_list(self):
        self.assertEqual(search_entries("orquidea", [self.rosa, self.tulipan]), [])


if __name__ == "__main__":
    unittest.main()

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from locforge_enums import SortField, SortOrder
from locforge_exceptions import InputError
from locforge_logger import get_logger
from locforge_models import Entry

logger = get_logger("core.search_manager")

# (0-based position in the store, entry)
IndexedEntry = Tuple[int, Entry]


@dataclass
class ReplaceResult:
    entries: List[Entry]
    replaced_indices: List[int]

    @property
    def replaced_count(self) -> int:
        return len(self.replaced_indices)


class SearchManager:
    """
    Editor-side search, sort and replace over an entry list.

    Views keep the original position of every entry so edits made on a
    filtered or sorted view land on the right line.
    """

    def filter_entries(self, entries: Sequence[Entry], keyword: str) -> List[IndexedEntry]:
        """Entries whose key or value contains keyword (case-insensitive)."""
        indexed = list(enumerate(entries))
        needle = (keyword or "").strip().lower()
        if not needle:
            return indexed
        return [(i, e) for i, e in indexed
                if needle in e.key.lower() or needle in e.value.lower()]

    def sort_entries(self, indexed: Sequence[IndexedEntry], field: SortField = SortField.NONE,
                     order: SortOrder = SortOrder.ASC) -> List[IndexedEntry]:
        """Sort a view by key or value; SortField.NONE keeps file order."""
        field = SortField(field)
        if field == SortField.NONE:
            return list(indexed)

        def _sort_key(item: IndexedEntry):
            entry = item[1]
            text = entry.key if field == SortField.KEY else entry.value
            return text.casefold()

        return sorted(indexed, key=_sort_key, reverse=SortOrder(order) == SortOrder.DESC)

    def build_view(self, entries: Sequence[Entry], keyword: str = "",
                   field: SortField = SortField.NONE,
                   order: SortOrder = SortOrder.ASC) -> List[IndexedEntry]:
        return self.sort_entries(self.filter_entries(entries, keyword), field, order)

    def replace_in_values(self, entries: Sequence[Entry], find_text: str, replace_text: str,
                          indices: Optional[Sequence[int]] = None) -> ReplaceResult:
        """
        Replace every occurrence of find_text inside values.

        Args:
            entries: Whole store
            find_text: Literal text to find (case-sensitive)
            replace_text: Replacement
            indices: Restrict to these positions (e.g. the current search view)

        Raises:
            InputError: find_text is empty
        """
        if not find_text:
            raise InputError("Find text must not be empty", details={'operation': 'replace'})

        allowed = set(indices) if indices is not None else None
        new_entries = list(entries)
        replaced = []
        for i, entry in enumerate(entries):
            if allowed is not None and i not in allowed:
                continue
            if find_text in entry.value:
                new_entries[i] = entry.with_value(entry.value.replace(find_text, replace_text))
                replaced.append(i)

        logger.debug(f"Replaced '{find_text}' in {len(replaced)} entries")
        return ReplaceResult(new_entries, replaced)

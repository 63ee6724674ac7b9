import threading
import unittest
from unittest.mock import Mock

from gdriveapi.controller.pagination import iter_items, list_all
from gdriveapi.errors import InvalidArgumentError, NotFoundError, OperationCancelledError


class TestPagination(unittest.TestCase):
    def test_invalid_page_size_raises_before_fetch(self) -> None:
        for page_size in (0, -1):
            fetch = Mock()
            with self.assertRaises(InvalidArgumentError):
                list_all(fetch, "q", page_size)
            with self.assertRaises(InvalidArgumentError):
                iter_items(fetch, "q", page_size)
            fetch.assert_not_called()

    def test_concatenates_pages_in_order_until_empty_token(self) -> None:
        fetch = Mock(side_effect=[(["a", "b"], "t1"), (["c"], "t2"), ([], None)])

        result = list_all(fetch, "q", 2)

        self.assertEqual(result, ["a", "b", "c"])
        self.assertEqual(fetch.call_count, 3)
        self.assertEqual(
            [c.args for c in fetch.call_args_list],
            [("q", 2, None), ("q", 2, "t1"), ("q", 2, "t2")],
        )

    def test_empty_string_token_also_terminates(self) -> None:
        fetch = Mock(side_effect=[(["a"], "")])
        self.assertEqual(list_all(fetch, "q", 10), ["a"])
        self.assertEqual(fetch.call_count, 1)

    def test_duplicates_are_passed_through(self) -> None:
        fetch = Mock(side_effect=[(["a", "b"], "t1"), (["b", "a"], None)])
        self.assertEqual(list_all(fetch, "q", 2), ["a", "b", "b", "a"])

    def test_error_propagates_without_partial_results(self) -> None:
        fetch = Mock(side_effect=[(["a"], "t1"), NotFoundError("gone")])
        with self.assertRaises(NotFoundError):
            list_all(fetch, "q", 1)
        self.assertEqual(fetch.call_count, 2)

    def test_each_call_starts_a_fresh_traversal(self) -> None:
        fetch = Mock(side_effect=[(["a"], None), (["a"], None)])
        list_all(fetch, "q", 5)
        list_all(fetch, "q", 5)
        self.assertIsNone(fetch.call_args_list[1].args[2])

    def test_iter_items_is_lazy(self) -> None:
        fetch = Mock(side_effect=[(["a"], "t1"), (["b"], None)])
        items = iter_items(fetch, "q", 1)
        fetch.assert_not_called()
        self.assertEqual(next(items), "a")
        self.assertEqual(fetch.call_count, 1)

    def test_cancel_stops_before_next_page(self) -> None:
        cancel = threading.Event()

        def fetch(q, page_size, token):
            cancel.set()
            return ["a"], "t1"

        with self.assertRaises(OperationCancelledError):
            list_all(fetch, "q", 1, cancel=cancel)


if __name__ == "__main__":
    unittest.main()

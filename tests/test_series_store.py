import unittest

from Sample import Sample
from SeriesStore import SeriesStore


def _batch(*idxs):
    return [Sample(idx=i, t_hour=i / 3600) for i in idxs]


class SeriesStoreTest(unittest.TestCase):
    def setUp(self):
        self.store = SeriesStore()

    def test_starts_empty(self):
        self.assertEqual(self.store.cursor, 0)
        self.assertEqual(self.store.all(), ())
        self.assertEqual(len(self.store), 0)

    def test_append_advances_cursor(self):
        self.assertTrue(self.store.append(_batch(1, 2)))
        self.assertEqual(self.store.cursor, 2)
        self.assertEqual(len(self.store.all()), 2)

    def test_empty_append_changes_nothing(self):
        self.store.append(_batch(1, 2))
        self.assertFalse(self.store.append([]))
        self.assertEqual(self.store.cursor, 2)
        self.assertEqual(len(self.store), 2)

    def test_batches_keep_ingestion_order(self):
        s1, s2 = _batch(1, 2, 5), _batch(6, 9)
        self.store.append(s1)
        self.store.append(s2)
        self.assertEqual(list(self.store.all()), s1 + s2)
        self.assertEqual(self.store.cursor, 9)

    def test_overlapping_batch_is_rejected(self):
        self.store.append(_batch(1, 2, 3))
        with self.assertRaises(ValueError):
            self.store.append(_batch(3, 4))
        with self.assertRaises(ValueError):
            self.store.append(_batch(5, 4))
        self.assertEqual(self.store.cursor, 3)
        self.assertEqual(len(self.store), 3)

    def test_reset_clears_and_rejects_old_session(self):
        old = self.store.session
        self.store.append(_batch(1, 2), session=old)

        new = self.store.reset()
        self.assertNotEqual(old, new)
        self.assertEqual(self.store.cursor, 0)
        self.assertEqual(len(self.store), 0)

        self.assertFalse(self.store.append(_batch(3, 4), session=old))
        self.assertEqual(len(self.store), 0)
        self.assertTrue(self.store.append(_batch(1), session=new))
        self.assertEqual(self.store.cursor, 1)

    def test_snapshot_is_not_mutated_by_later_appends(self):
        self.store.append(_batch(1))
        snap = self.store.all()
        self.store.append(_batch(2))
        self.assertEqual(len(snap), 1)
        self.assertEqual(len(self.store.all()), 2)


if __name__ == "__main__":
    unittest.main()

import json
import os
import tempfile
import unittest

from swissquoteanalyzer.__main__ import main
from swissquoteanalyzer.errors import LayoutError
from swissquoteanalyzer.layout import DEFAULT_LAYOUT, ColumnBand, layout_from_dict, load_layout
from swissquoteanalyzer.models import Word


class LayoutTest(unittest.TestCase):
  def test_default_bands(self):
    self.assertEqual(DEFAULT_LAYOUT.band("date"), ColumnBand("date", 30, 35))
    self.assertEqual(DEFAULT_LAYOUT.band("debit"), ColumnBand("debit", 275, 340))
    self.assertEqual(DEFAULT_LAYOUT.row_height_ratio, 0.9)
    self.assertEqual(DEFAULT_LAYOUT.last_row_span, 40)

  def test_band_bounds_are_inclusive(self):
    band = ColumnBand("credit", 345, 420)
    self.assertTrue(band.contains(Word("1.00", 345, 0)))
    self.assertTrue(band.contains(Word("1.00", 420, 0)))
    self.assertFalse(band.contains(Word("1.00", 420.5, 0)))

  def test_overrides(self):
    layout = layout_from_dict({"bands": {"debit": [270, 330]}, "lastRowSpan": 55, "currencies": ["CHF"]})
    self.assertEqual(layout.band("debit"), ColumnBand("debit", 270, 330))
    self.assertEqual(layout.band("credit"), DEFAULT_LAYOUT.band("credit"))
    self.assertEqual(layout.last_row_span, 55)
    self.assertEqual(layout.currencies, ("CHF",))
    self.assertEqual(DEFAULT_LAYOUT.last_row_span, 40)

  def test_unknown_band(self):
    with self.assertRaises(LayoutError):
      layout_from_dict({"bands": {"balance": [480, 540]}})

  def test_unknown_setting(self):
    with self.assertRaises(LayoutError):
      layout_from_dict({"rowHeight": 0.8})

  def test_inverted_band(self):
    with self.assertRaises(LayoutError):
      layout_from_dict({"bands": {"debit": [340, 275]}})

  def test_word_gap(self):
    self.assertEqual(DEFAULT_LAYOUT.word_gap, 0.5)
    self.assertEqual(layout_from_dict({"wordGap": 1}).word_gap, 1.0)

  def test_malformed_values(self):
    for raw in ({"lastRowSpan": "abc"},
                {"headerPages": None},
                {"headerPages": 1.5},
                {"rowHeightRatio": True},
                {"currencies": "CHF"},
                {"currencies": ["CHF", 1]},
                {"defaultCurrency": 7},
                {"bands": []},
                {"bands": {"debit": "275-340"}},
                {"bands": {"debit": [275]}},
                {"bands": {"debit": [275, "x"]}}):
      with self.subTest(raw=raw):
        with self.assertRaises(LayoutError):
          layout_from_dict(raw)

  def test_cli_rejects_bad_layout(self):
    with tempfile.TemporaryDirectory() as tmp:
      path = os.path.join(tmp, 'layout.json')
      with open(path, 'w') as f:
        json.dump({"headerPages": None}, f)
      argv = ['extract', '-i', os.path.join(tmp, 'statement.pdf'),
              '-o', os.path.join(tmp, 'out.json'), '--layout', path]
      self.assertEqual(main(argv), 1)

  def test_load_layout_file(self):
    with tempfile.TemporaryDirectory() as tmp:
      path = os.path.join(tmp, 'layout.json')
      with open(path, 'w') as f:
        json.dump({"rowHeightRatio": 0.8}, f)
      self.assertEqual(load_layout(path).row_height_ratio, 0.8)
      with self.assertRaises(LayoutError):
        load_layout(os.path.join(tmp, 'missing.json'))


if __name__ == '__main__':
  unittest.main()

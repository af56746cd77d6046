from bert_wordpiece.data import build_dataset


SPLITS = {
    "train": [{"text": " Hello world. \n"}, {"text": ""}, {"text": "   "}, {"label": 1}],
    "test": [{"text": "Second split."}, {"text": "Third."}],
}


def test_build_dataset_skips_blank_and_missing_values():
    assert build_dataset(SPLITS, "text") == ["Hello world.", "Second split.", "Third."]


def test_build_dataset_stops_at_num_examples():
    assert build_dataset(SPLITS, "text", num_examples=2) == ["Hello world.", "Second split."]

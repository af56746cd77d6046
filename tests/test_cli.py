import json

import pytest

from bert_wordpiece import cli


def test_tokenize_string(vocab_file, capsys):
    assert cli.main(["--vocab", vocab_file, "--tokenize", "Hello, world!"]) == 0

    out = capsys.readouterr().out
    assert "['hello', ',', 'world', '!']" in out


def test_tokenize_json_file_writes_tokens(tmp_path, vocab_file):
    inputs = tmp_path / "test.json"
    inputs.write_text(json.dumps(["hello world", "unaffable"]), encoding="utf-8")

    cli.main(["--vocab", vocab_file, "--tokenize", str(inputs)])

    output = json.loads((tmp_path / "test.tokens.json").read_text(encoding="utf-8"))
    assert output == [["hello", "world"], ["un", "##aff", "##able"]]


def test_cased_flag(vocab_file, capsys):
    cli.main(["--vocab", vocab_file, "--cased", "--tokenize", "Hello hello"])

    assert "['[UNK]', 'hello']" in capsys.readouterr().out


def test_encode_and_decode(vocab_file, capsys):
    cli.main(["--vocab", vocab_file, "--encode", "hello [SEP] world"])
    assert "[5, 3, 6]" in capsys.readouterr().out

    cli.main(["--vocab", vocab_file, "--decode", "7, 8 9 999"])
    out = capsys.readouterr().out
    assert "['un', '##aff', '##able', '[UNK]']" in out
    assert "unaffable [UNK]" in out


def test_decode_rejects_non_integers(vocab_file):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--vocab", vocab_file, "--decode", "a b"])
    assert excinfo.value.code == 2


def test_save_then_load_pretrained(tmp_path, vocab_file, capsys):
    saved = str(tmp_path / "saved")
    cli.main(["--vocab", vocab_file, "--cased", "--save", saved])

    cli.main(["--pretrained", saved, "--tokenize", "Hello hello"])
    assert "['[UNK]', 'hello']" in capsys.readouterr().out


def test_benchmark_without_reference(vocab_file, capsys):
    cli.main(["--vocab", vocab_file, "--benchmark", "Hello, unaffable world!"])

    out = capsys.readouterr().out
    assert "Benchmarking on 1 sentence(s)" in out
    assert "Tokenization Metrics for BertTokenizer" in out


def test_missing_vocabulary_exits_with_error(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--vocab", str(tmp_path / "missing.txt"), "--tokenize", "hello"])

    assert excinfo.value.code == 1
    assert "Vocabulary file not found" in capsys.readouterr().err


@pytest.mark.parametrize("argv", [
    ["--tokenize", "hello"],
    ["--vocab", "vocab.txt", "--compare"],
    ["--vocab", "vocab.txt", "--reference", "bert-base-uncased"],
])
def test_usage_errors(argv):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(argv)
    assert excinfo.value.code == 2


def test_tokenize_empty_string(vocab_file, capsys):
    cli.main(["--vocab", vocab_file, "--tokenize", ""])

    assert "[]" in capsys.readouterr().out


def test_save_to_a_file_path_exits_with_error(tmp_path, vocab_file, capsys):
    target = tmp_path / "not_a_directory"
    target.write_text("", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--vocab", vocab_file, "--save", str(target)])

    assert excinfo.value.code == 1
    assert "error" in capsys.readouterr().err


def test_huggingface_source(hf_tokenizer_dir, capsys):
    cli.main(["--huggingface", hf_tokenizer_dir, "--tokenize", "Hello, unaffable world!"])

    assert "['hello', ',', 'un', '##aff', '##able', 'world', '!']" in capsys.readouterr().out


def test_compare_against_huggingface_reference(vocab_file, hf_tokenizer_dir, capsys):
    cli.main([
        "--vocab", vocab_file,
        "--benchmark", "Hello, unaffable world!",
        "--reference", hf_tokenizer_dir,
        "--compare",
    ])

    out = capsys.readouterr().out
    assert "Reference Parity" in out
    assert "100.00% (1/1)" in out
    assert "Tokenization Metrics" not in out

import random

import pytest

import huffman as huff
from errors import (
	EmptyInputError,
	HuffmanError,
	IncompleteCodewordError,
	InvalidBitError,
	SymbolNotInCodeTableError,
	TreeNotBuiltError,
)


def _pipeline(data):
	ft = huff.count_frequencies(data)
	root = huff.build_huffman_tree(ft)
	codes = huff.generate_huffman_codes(root)
	return ft, root, codes


def _is_prefix_free(codes):
	values = list(codes.values())
	for i, a in enumerate(values):
		for j, b in enumerate(values):
			if i != j and b.startswith(a):
				return False
	return True


# Frequency counting

def test_count_frequencies_keeps_first_seen_order():
	ft = huff.count_frequencies("banana")
	assert ft == {"b": 1, "a": 3, "n": 2}
	assert list(ft) == ["b", "a", "n"]


def test_count_frequencies_accepts_bytes():
	assert huff.count_frequencies(b"aab") == {97: 2, 98: 1}


def test_count_frequencies_empty_input_raises():
	with pytest.raises(EmptyInputError, match="Empty input"):
		huff.count_frequencies("")


def test_counts_do_not_depend_on_scan_order():
	text = "mississippi river"
	assert huff.count_frequencies(text) == huff.count_frequencies(text[::-1])


# Tree building

def test_build_from_empty_table_raises():
	with pytest.raises(EmptyInputError):
		huff.build_huffman_tree({})


def test_weight_conservation():
	ft, root, _ = _pipeline("the quick brown fox jumps over the lazy dog")
	assert root.frequency == sum(ft.values())
	for node in huff.iter_nodes(root):
		if node.is_leaf:
			assert node.symbol is not None
		else:
			assert node.symbol is None
			assert node.frequency == node.left.frequency + node.right.frequency


def test_every_symbol_is_one_leaf():
	ft, root, _ = _pipeline("abracadabra")
	leaves = [n.symbol for n in huff.iter_nodes(root) if n.is_leaf]
	assert sorted(leaves) == sorted(ft)


def test_known_tree_shape():
	# a:5 b:2 r:2 c:1 d:1
	_, root, codes = _pipeline("abracadabra")
	assert root.left.symbol == "a"
	assert codes == {"a": "0", "c": "100", "d": "101", "b": "110", "r": "111"}


def test_tie_break_is_deterministic():
	first = _pipeline("abab")[2]
	for _ in range(10):
		assert _pipeline("abab")[2] == first
	assert first == {"a": "0", "b": "1"}


# Code generation

def test_generate_codes_without_tree_raises():
	with pytest.raises(TreeNotBuiltError):
		huff.generate_huffman_codes(None)


def test_singleton_alphabet():
	ft, root, codes = _pipeline("aaaa")
	assert ft == {"a": 4}
	assert root.is_leaf
	assert codes == {"a": "0"}
	encoded = huff.huffman_encode("aaaa", codes)
	assert encoded == "0000"
	assert huff.huffman_decode(encoded, root) == "aaaa"


@pytest.mark.parametrize("text", ["abracadabra", "aabbccdd", "hello, world", "x" * 3 + "y"])
def test_codes_are_prefix_free(text):
	_, _, codes = _pipeline(text)
	assert all(codes.values())
	assert _is_prefix_free(codes)


def test_frequent_symbols_get_shorter_codes():
	_, _, codes = _pipeline("e" * 50 + "t" * 20 + "a" * 5 + "z")
	assert len(codes["e"]) <= len(codes["t"]) <= len(codes["a"]) <= len(codes["z"])


# Encoding / decoding

def test_encode_unknown_symbol_raises():
	_, _, codes = _pipeline("abc")
	with pytest.raises(SymbolNotInCodeTableError) as excinfo:
		huff.huffman_encode("abd", codes)
	assert excinfo.value.symbol == "d"


def test_encode_returns_fresh_string_each_call():
	_, _, codes = _pipeline("abab")
	assert huff.huffman_encode("ab", codes) == "01"
	assert huff.huffman_encode("ab", codes) == "01"


def test_roundtrip_random_texts():
	rng = random.Random(7)
	for n in (1, 2, 3, 17, 500):
		text = "".join(chr(rng.randrange(0, 256)) for _ in range(n))
		_, root, codes = _pipeline(text)
		assert huff.huffman_decode(huff.huffman_encode(text, codes), root) == text


def test_roundtrip_bytes():
	data = bytes(range(256)) + b"AAAA"
	_, root, codes = _pipeline(data)
	assert huff.huffman_decode(huff.huffman_encode(data, codes), root) == data


def test_decode_empty_stream():
	_, root, _ = _pipeline("abc")
	assert huff.huffman_decode("", root) == ""


def test_decode_without_tree_raises():
	with pytest.raises(TreeNotBuiltError, match="Tree not built"):
		huff.huffman_decode("0101", None)


def test_decode_trailing_zero_is_incomplete():
	# balanced tree, the root's left child is internal
	_, root, codes = _pipeline("aabbccdd")
	encoded = huff.huffman_encode("abcd", codes)
	with pytest.raises(IncompleteCodewordError, match="Incomplete codeword"):
		huff.huffman_decode(encoded + "0", root)


def test_decode_truncated_stream_is_incomplete():
	_, root, codes = _pipeline("abracadabra")
	encoded = huff.huffman_encode("abrac", codes)  # ends with c = 100
	with pytest.raises(IncompleteCodewordError) as excinfo:
		huff.huffman_decode(encoded[:-1], root)
	assert excinfo.value.pending_bits == 2


@pytest.mark.parametrize("bad", ["012", "0a1", "0 1"])
def test_decode_invalid_bit(bad):
	_, root, _ = _pipeline("abab")
	with pytest.raises(InvalidBitError, match="Invalid bit"):
		huff.huffman_decode(bad, root)


def test_decode_singleton_tree_rejects_one_bit():
	_, root, _ = _pipeline("aaaa")
	with pytest.raises(InvalidBitError) as excinfo:
		huff.huffman_decode("0010", root)
	assert excinfo.value.position == 2


def test_all_errors_share_a_base_class():
	for exc in (EmptyInputError, TreeNotBuiltError, IncompleteCodewordError):
		assert issubclass(exc, HuffmanError)
		assert issubclass(exc, ValueError)


def test_average_code_length():
	ft, _, codes = _pipeline("abracadabra")
	assert huff.average_code_length(ft, codes) == pytest.approx(23 / 11)

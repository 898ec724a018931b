from errors import (
    EmptyInputError,
    IncompleteCodewordError,
    InvalidBitError,
    SymbolNotInCodeTableError,
    TreeNotBuiltError,
)
from pqueue import PriorityQueue

class HuffmanNode: # Node for Huffman tree
    def __init__(self, symbol, frequency):
        self.symbol = symbol    # character, byte or None for internal nodes
        self.frequency = frequency
        self.left = None
        self.right = None

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def __repr__(self):
        if self.is_leaf:
            return f"HuffmanNode({self.symbol!r}, {self.frequency})"
        return f"HuffmanNode(<internal>, {self.frequency})"

def count_frequencies(data) -> dict: # data: str or bytes, keys keep first-seen order
    if len(data) == 0:
        raise EmptyInputError()
    frequency_table = {}
    for symbol in data:
        frequency_table[symbol] = frequency_table.get(symbol, 0) + 1
    return frequency_table

def build_huffman_tree(frequency_table): # frequency_table: dict of symbol -> frequency
    if not frequency_table:
        raise EmptyInputError()

    priority_queue = PriorityQueue()
    for symbol, frequency in frequency_table.items(): # insertion order sets the tie-break order
        priority_queue.insert(HuffmanNode(symbol, frequency))

    # Build the tree
    while len(priority_queue) > 1:
        left = priority_queue.extract_min()
        right = priority_queue.extract_min()
        merged_node = HuffmanNode(None, left.frequency + right.frequency) # internal node with combined frequency
        merged_node.left = left
        merged_node.right = right
        priority_queue.insert(merged_node) # add the merged node back to the priority queue

    return priority_queue.extract_min() # root of the tree, a bare leaf for a one-symbol alphabet

def generate_huffman_codes(root): # root: root of the Huffman tree
    if root is None:
        raise TreeNotBuiltError()

    # One-symbol alphabet: the root is the leaf, its path would be empty
    if root.is_leaf:
        return {root.symbol: '0'}

    codes = {}
    def generate_codes_helper(node, current_code): # recursive helper function to traverse the tree and generate codes
        # Leaf node -> assign code
        if node.is_leaf:
            codes[node.symbol] = current_code
            return

        generate_codes_helper(node.left, current_code + '0')
        generate_codes_helper(node.right, current_code + '1')

    generate_codes_helper(root, '')
    return codes # return the mapping of symbols to their corresponding Huffman codes

def huffman_encode(data, code_map: dict) -> str: # data: str or bytes to encode, code_map: dict of symbol -> Huffman code
    parts = []
    for symbol in data:
        code = code_map.get(symbol)
        if code is None:
            raise SymbolNotInCodeTableError(symbol)
        parts.append(code)
    return ''.join(parts)

def huffman_decode(bitstring: str, root):
    """
    Walk the tree from the root, one bit at a time, and emit a symbol on every leaf
    Returns str for a tree built from text and bytes for a tree built from bytes
    """
    if root is None:
        raise TreeNotBuiltError("Tree not built")

    decoded = []
    current_node = root
    pending = 0 # bits consumed since the cursor last left the root
    for position, bit in enumerate(bitstring):
        if bit != '0' and bit != '1':
            raise InvalidBitError(bit, position)

        if root.is_leaf: # one-symbol tree: every '0' is a whole codeword, '1' leads nowhere
            if bit == '1':
                raise InvalidBitError(bit, position)
            decoded.append(root.symbol)
            continue

        current_node = current_node.left if bit == '0' else current_node.right
        pending += 1
        if current_node.is_leaf: # reached a leaf
            decoded.append(current_node.symbol)
            current_node = root # reset to the root for the next symbol
            pending = 0

    if current_node is not root:
        raise IncompleteCodewordError(pending)

    if isinstance(_any_symbol(root), int):
        return bytes(decoded)
    return ''.join(decoded)

def _any_symbol(root): # leftmost leaf symbol, tells text trees from byte trees
    node = root
    while not node.is_leaf:
        node = node.left
    return node.symbol

def iter_nodes(root): # pre-order walk over every node of the tree
    if root is None:
        raise TreeNotBuiltError()
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        if not node.is_leaf:
            stack.append(node.right)
            stack.append(node.left)

def average_code_length(frequency_table: dict, code_map: dict) -> float: # bits per symbol, weighted by frequency
    total = sum(frequency_table.values())
    if total == 0:
        return 0.0
    return sum(frequency * len(code_map[symbol]) for symbol, frequency in frequency_table.items()) / total

class HuffmanError(ValueError): # base class for every failure raised by the coder
    pass

class EmptyInputError(HuffmanError):
    def __init__(self, message="Empty input"):
        super().__init__(message)

class EmptyQueueError(HuffmanError): # should never reach a caller that uses the builder correctly
    def __init__(self, message="Empty queue"):
        super().__init__(message)

class TreeNotBuiltError(HuffmanError):
    def __init__(self, message="Tree not built, call build_huffman_tree before generating codes"):
        super().__init__(message)

class SymbolNotInCodeTableError(HuffmanError):
    def __init__(self, symbol):
        self.symbol = symbol
        super().__init__(f"Symbol not in code table: {symbol!r}")

class InvalidBitError(HuffmanError):
    def __init__(self, bit, position):
        self.bit = bit
        self.position = position
        super().__init__(f"Invalid bit in encoded stream: {bit!r} at position {position}")

class IncompleteCodewordError(HuffmanError):
    def __init__(self, pending_bits):
        self.pending_bits = pending_bits
        super().__init__(f"Incomplete codeword at end of stream ({pending_bits} trailing bits)")

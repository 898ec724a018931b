from errors import EmptyQueueError

class PriorityQueue: # min-heap of tree nodes keyed by frequency
    """
    Binary min-heap ordered by node frequency
    Equal frequencies come out in insertion order (FIFO), so the tree built on
    top of it is the same on every run
    """
    def __init__(self):
        self._heap = [] # entries are (frequency, sequence, node)
        self._counter = 0 # next insertion sequence number

    def __len__(self):
        return len(self._heap)

    def is_empty(self) -> bool:
        return not self._heap

    def insert(self, node) -> None:
        self._heap.append((node.frequency, self._counter, node))
        self._counter += 1
        self._sift_up(len(self._heap) - 1)

    def extract_min(self):
        if not self._heap:
            raise EmptyQueueError()
        smallest = self._heap[0]
        last = self._heap.pop()
        if self._heap:
            self._heap[0] = last # move the last entry to the root and push it down
            self._sift_down(0)
        return smallest[2]

    def _less(self, i: int, j: int) -> bool:
        return self._heap[i][:2] < self._heap[j][:2] # never compare the nodes themselves

    def _sift_up(self, index: int) -> None:
        while index > 0:
            parent = (index - 1) // 2
            if not self._less(index, parent):
                break
            self._heap[index], self._heap[parent] = self._heap[parent], self._heap[index]
            index = parent

    def _sift_down(self, index: int) -> None:
        size = len(self._heap)
        while True:
            left = 2 * index + 1
            right = left + 1
            if left >= size:
                return

            # smaller child, left wins a tie
            child = left
            if right < size and self._less(right, left):
                child = right

            if not self._less(child, index):
                return
            self._heap[index], self._heap[child] = self._heap[child], self._heap[index]
            index = child

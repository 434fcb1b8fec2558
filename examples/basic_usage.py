"""Basic usage example for linklists."""

from linklists import DoublyLinkedList, EmptyListError, SinglyLinkedList


def main() -> None:
    """Demonstrate basic list operations."""
    print("=== Singly Linked List ===\n")

    stack = SinglyLinkedList[str]()
    for word in ("first", "second", "third"):
        stack.push_front(word)
    print(f"Stack contents: {list(stack)}")

    while stack:
        print(f"  Popped {stack.pop_front()}")

    try:
        stack.pop_front()
    except EmptyListError as exc:
        print(f"  Empty stack: {exc}\n")

    print("=== Doubly Linked List ===\n")

    history = DoublyLinkedList[int]([1, 2, 4])
    history.insert_at(2, 3)
    print(f"Forward:  {list(history)}")
    print(f"Backward: {list(reversed(history))}")

    # Keep a position around for O(1) edits next to it
    position = history.find(lambda x: x == 3)
    if position is not None:
        history.insert_after(position, 35)
        print(f"Removed before 3: {history.remove_before(position)}")
    print(f"Final: {list(history)} (length {len(history)})")


if __name__ == "__main__":
    main()

"""The widget tree: nodes, containers, reactive rebuilding and value supply."""

from __future__ import annotations

from typing import Any, Callable, Generic, Iterable, List, Optional, Type, TypeVar

from karm.align import Hint
from karm.flow import Rect, Vec2

T = TypeVar("T")

Visitor = Callable[["Node"], Any]


class Node:
    """A node of the widget tree."""

    def __init__(self) -> None:
        self._parent: Optional[Node] = None

    @property
    def parent(self) -> Optional[Node]:
        return self._parent

    def reconcile(self, other: Node) -> Optional[Node]:
        """Merge ``other`` into this node.

        Returns None when this node was kept and updated, or the node that
        should replace it when the two are of different kinds.
        """
        if type(other) is not type(self):
            return other
        self.update_from(other)
        return None

    def update_from(self, other: Node) -> None:
        """Take over the state of a node of the same kind."""

    def layout(self, rect: Rect) -> None:
        pass

    def size(self, s: Vec2, hint: Hint) -> Vec2:
        return s

    def bound(self) -> Rect:
        return Rect()

    def visit(self, visitor: Visitor) -> None:
        pass

    def attach(self, parent: Node) -> None:
        self._parent = parent

    def detach(self) -> None:
        self._parent = None

    def query(self, kind: type) -> Any:
        """The nearest of this node and its ancestors that is a ``kind``."""
        if isinstance(self, kind):
            return self
        return self._parent.query(kind) if self._parent is not None else None

    def should_layout(self) -> None:
        """Ask the tree to lay itself out again."""
        self.bubble_layout()

    def bubble_layout(self) -> None:
        """Pass a layout request up the tree."""
        if self._parent is not None:
            self._parent.bubble_layout()


class Proxy(Node):
    """A node wrapping a single child and forwarding to it."""

    def __init__(self, child: Node) -> None:
        super().__init__()
        self._child = child
        child.attach(self)

    @property
    def child(self) -> Node:
        return self._child

    def update_from(self, other: Node) -> None:
        self._child = self._child.reconcile(other._child) or self._child
        self._child.attach(self)

    def layout(self, rect: Rect) -> None:
        self._child.layout(rect)

    def size(self, s: Vec2, hint: Hint) -> Vec2:
        return self._child.size(s, hint)

    def bound(self) -> Rect:
        return self._child.bound()

    def visit(self, visitor: Visitor) -> None:
        visitor(self._child)


class Group(Node):
    """A node holding a list of children."""

    def __init__(self, children: Iterable[Node] = ()) -> None:
        super().__init__()
        self._children: List[Node] = list(children)
        self._bound = Rect()
        for child in self._children:
            child.attach(self)

    @property
    def children(self) -> List[Node]:
        return self._children

    def update_from(self, other: Node) -> None:
        us = self._children
        for i, theirs in enumerate(other._children):
            if i < len(us):
                us[i] = us[i].reconcile(theirs) or us[i]
            else:
                us.append(theirs)
            us[i].attach(self)
        del us[len(other._children):]

    def layout(self, rect: Rect) -> None:
        self._bound = rect
        for child in self._children:
            child.layout(rect)

    def bound(self) -> Rect:
        return self._bound

    def visit(self, visitor: Visitor) -> None:
        for child in self._children:
            visitor(child)


class View(Node):
    """A leaf node that remembers the rectangle it was laid out in."""

    def __init__(self) -> None:
        super().__init__()
        self._bound = Rect()

    def bound(self) -> Rect:
        return self._bound

    def layout(self, rect: Rect) -> None:
        self._bound = rect


class Empty(View):
    """A leaf of a fixed size that shows nothing."""

    def __init__(self, size: Vec2 = Vec2()) -> None:
        super().__init__()
        self._size = size

    def update_from(self, other: Node) -> None:
        self._size = other._size

    def size(self, s: Vec2, hint: Hint) -> Vec2:
        return self._size


def empty(size: Vec2 = Vec2()) -> Node:
    return Empty(size)


class StackLayout(Group):
    """Children laid out on top of each other, all in the same rectangle."""

    def layout(self, rect: Rect) -> None:
        for child in self._children:
            child.layout(rect)


def _flatten(args: Iterable[Any]) -> List[Node]:
    children: List[Node] = []
    for arg in args:
        if isinstance(arg, Node):
            children.append(arg)
        else:
            children.extend(arg)
    return children


def stack(*args: Any) -> Node:
    """A stack of the given nodes; lists of nodes are accepted too."""
    return StackLayout(_flatten(args))


class React(Node):
    """A node whose single child is produced by ``build`` and rebuilt on demand."""

    def __init__(self) -> None:
        super().__init__()
        self._rebuild = True
        self._child: Optional[Node] = None

    def build(self) -> Node:
        raise NotImplementedError(f"{type(self).__name__} must define build()")

    def should_rebuild(self) -> None:
        self._rebuild = True
        self.should_layout()

    def ensure_build(self) -> None:
        if not self._rebuild:
            return
        new_child = self.build()
        if self._child is not None:
            result = self._child.reconcile(new_child)
            if result is not None:
                self._child = result
        else:
            self._child = new_child
        self._child.attach(self)
        self._rebuild = False

    def update_from(self, other: Node) -> None:
        pass

    def layout(self, rect: Rect) -> None:
        self.ensure_build()
        self._child.layout(rect)

    def size(self, s: Vec2, hint: Hint) -> Vec2:
        self.ensure_build()
        return self._child.size(s, hint)

    def bound(self) -> Rect:
        self.ensure_build()
        return self._child.bound()

    def visit(self, visitor: Visitor) -> None:
        if self._child is not None:
            visitor(self._child)


class State(Generic[T]):
    """A handle to the value kept by a StateNode."""

    def __init__(self, node: StateNode[T]) -> None:
        self._node = node

    @property
    def value(self) -> T:
        return self._node._value

    def update(self, value: T) -> None:
        self._node._value = value
        self._node.should_rebuild()

    def bind(self, func: Callable[[T], T]) -> Callable[[], None]:
        """A callback that replaces the value with ``func(value)``."""

        def callback() -> None:
            self.update(func(self.value))

        return callback

    def dispatch(self, func: Callable[[T], T]) -> None:
        self.update(func(self.value))


class StateNode(React, Generic[T]):
    """A reactive node keeping a value and rebuilding when it changes."""

    def __init__(self, initial: T, build: Callable[[State[T]], Node]) -> None:
        super().__init__()
        self._value = initial
        self._build = build

    def build(self) -> Node:
        return self._build(State(self))


def state(initial: T, build: Callable[[State[T]], Node]) -> Node:
    return StateNode(initial, build)


class Supplier(Proxy):
    """Makes ``provided`` available to descendants querying for ``kind``."""

    def __init__(self, child: Node, provided: Any, kind: Optional[Type[Any]] = None) -> None:
        super().__init__(child)
        self._provided = provided
        self._kind = kind if kind is not None else type(provided)

    def query(self, kind: type) -> Any:
        if kind is self._kind:
            return self._provided
        return self._parent.query(kind) if self._parent is not None else None
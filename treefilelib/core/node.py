"""TreeFileNode - one branch of a tree stored in files.

A node maps child names to one of three things: another TreeFileNode (a
branch), a plain value (a leaf), or a Pending slot standing in for a
directory entry that has not been read yet. Pending slots are resolved on
first access and replaced by their result, so each one is loaded at most
once.

Only mappings become nodes. Lists, strings, numbers and other values are
stored as leaves exactly as given.
"""

from collections.abc import Mapping
from typing import Any, Callable, Dict, Iterator, List, Optional

from ..config import RepresentationType, TreeFileConfig
from ..errors import InvalidNameError, MissingIdentifierError, NotABranchError, ReadOnlyError

# Marks "no argument given" for TreeFileNode.type(), where None means "clear".
_UNCHANGED = object()
_MISSING = object()


class Pending:
    """Deferred child, loaded the first time it is touched."""

    __slots__ = ("_thunk",)

    def __init__(self, thunk: Callable[[], Any]):
        self._thunk = thunk

    def resolve(self) -> Any:
        return self._thunk()

    def __repr__(self) -> str:
        return f"Pending({self._thunk!r})"


class TreeContext:
    """Collaborators shared by every node of one tree.

    Built once by the composition root (see treefilelib.api) and handed to
    each node created while loading or modifying the tree.

    Attributes:
        basedir: Path the tree was loaded from; node locations are relative to it
        codec: Reads and writes leaf files
        lock_manager: LockManager for basedir
        writer: Writes nodes back to disk
        config: Options the tree was loaded with
    """

    def __init__(self, basedir: str, codec, lock_manager, writer, config: TreeFileConfig):
        self.basedir = basedir
        self.codec = codec
        self.lock_manager = lock_manager
        self.writer = writer
        self.config = config

    def close(self) -> None:
        self.lock_manager.close()

    @property
    def not_found(self) -> Optional[Callable[[str, str], Any]]:
        return self.config.not_found

    def __repr__(self) -> str:
        return f"TreeContext(basedir={self.basedir!r}, codec={self.codec!r})"


def is_branch(value: Any) -> bool:
    """Check if a child value is a branch rather than a leaf."""
    return isinstance(value, TreeFileNode)


def child_location(location: str, name: str) -> str:
    """Location of the child called name below location."""
    return f"{location}/{name}"


def check_name(name: Any, location: str = "") -> str:
    """Return name if it can be used as a child name.

    Raises:
        InvalidNameError: If name is not a non-empty string without slashes
    """
    if not isinstance(name, str) or not name or "/" in name:
        raise InvalidNameError(name, location)
    return name


class TreeFileNode:
    """A branch of a file-backed tree.

    Children are addressed with slash-separated identifiers, so these two
    calls are identical:

        tree.get("foo").get("bar").get("baz")
        tree.get("foo/bar/baz")

    Leading slashes are ignored. Nothing here touches the disk except
    resolving a Pending child and write().
    """

    def __init__(self,
                 location: str,
                 children: Dict[str, Any],
                 context: TreeContext,
                 readonly: bool = False,
                 representation_type: Optional[RepresentationType] = None):
        """Initialize a node.

        Args:
            location: Path from the tree root to this node ("" for the root)
            children: Map of child name to node, leaf value or Pending
            context: Collaborators shared by the whole tree
            readonly: If True, set, delete and move raise ReadOnlyError
            representation_type: Forced on-disk shape, None to infer it on write
        """
        self._location = location
        self._children = children
        self._context = context
        self._readonly = readonly
        self._type = representation_type

    @classmethod
    def from_data(cls,
                  location: str,
                  data: Any,
                  context: TreeContext,
                  readonly: bool = False) -> Any:
        """Build a node tree from a value.

        Mappings become nodes, recursively. Anything else is returned
        unchanged.

        Args:
            location: Location of the resulting node
            data: Value to convert
            context: Collaborators shared by the whole tree
            readonly: Readonly flag given to every node created

        Returns:
            A TreeFileNode if data is a mapping, otherwise data itself

        Raises:
            InvalidNameError: If a mapping key is empty or contains a slash
        """
        if not isinstance(data, Mapping):
            return data
        children = {
            check_name(name, location): cls.from_data(child_location(location, name), value, context, readonly)
            for name, value in data.items()
        }
        return cls(location, children, context, readonly=readonly)

    # Properties

    @property
    def location(self) -> str:
        return self._location

    @property
    def readonly(self) -> bool:
        return self._readonly

    @property
    def context(self) -> TreeContext:
        return self._context

    # Path resolution

    def _identifier(self, node_id: Optional[str], operation: str) -> str:
        if node_id is not None:
            node_id = node_id.lstrip("/")
        if not node_id:
            raise MissingIdentifierError(operation, self._location)
        return node_id

    def _not_found(self, node_id: str) -> Any:
        handler = self._context.not_found
        if handler is not None:
            return handler(node_id, self._location)
        return None

    def _lookup(self, name: str, autovivify: bool = False) -> Any:
        """Return the child called name, or _MISSING.

        A Pending child is resolved and stored in its place.
        """
        if name in self._children:
            value = self._children[name]
            if isinstance(value, Pending):
                value = self._children[name] = value.resolve()
            return value
        if autovivify:
            child = TreeFileNode(child_location(self._location, name), {},
                                 self._context, readonly=self._readonly)
            self._children[name] = child
            return child
        return _MISSING

    def get(self, node_id: str, autovivify: bool = False) -> Any:
        """Return the branch or leaf at node_id.

        Args:
            node_id: Slash-separated identifier relative to this node
            autovivify: Create empty branches for missing names on the way

        Returns:
            The node or leaf value found. If nothing is there, the result of
            the tree's not_found callback, called with the missing name and
            the location of the last node reached (None by default). If the
            callback returns a branch for a missing name on the way, the rest
            of node_id is looked up in that branch.

        Raises:
            MissingIdentifierError: If node_id is None or empty
        """
        node_id = self._identifier(node_id, "get")
        head, _, rest = node_id.partition("/")

        value = self._lookup(head, autovivify)
        if rest:
            if value is _MISSING:
                value = self._not_found(head)
                if not is_branch(value):
                    return value
            elif not is_branch(value):
                return self._not_found(head)
            return value.get(rest, autovivify)

        if value is _MISSING:
            return self._not_found(head)
        return value

    def set(self, node_id: str, value: Any, root: Optional[str] = None) -> Any:
        """Set the value at node_id, creating branches on the way.

        Mappings are expanded into branches. A TreeFileNode is copied from
        its data().

        Args:
            node_id: Slash-separated identifier relative to this node
            value: New value
            root: Location to give the new node instead of the derived one

        Returns:
            The stored node or leaf value

        Raises:
            ReadOnlyError: If the tree is readonly
            MissingIdentifierError: If node_id is None or empty
            NotABranchError: If the path runs through a leaf value
            InvalidNameError: If a mapping in value has an empty or slashed key
        """
        if self._readonly:
            raise ReadOnlyError("set", self._location)
        node_id = self._identifier(node_id, "set")
        if is_branch(value):
            value = value.data()

        head, _, rest = node_id.partition("/")
        if rest:
            branch = self.get(head, autovivify=True)
            if not is_branch(branch):
                raise NotABranchError(head, self._location)
            return branch.set(rest, value, root)

        location = root if root is not None else child_location(self._location, head)
        self._children[head] = TreeFileNode.from_data(
            location, value, self._context, readonly=self._readonly)
        return self._children[head]

    def delete(self, node_id: str) -> Any:
        """Remove node_id and return what was stored there.

        Deleting a name that does not exist returns None.

        Raises:
            ReadOnlyError: If the tree is readonly
            MissingIdentifierError: If node_id is None or empty
        """
        if self._readonly:
            raise ReadOnlyError("delete", self._location)
        node_id = self._identifier(node_id, "delete")

        head, _, rest = node_id.partition("/")
        if rest:
            branch = self.get(head)
            if not is_branch(branch):
                return None
            return branch.delete(rest)

        value = self._children.pop(head, None)
        if isinstance(value, Pending):
            value = value.resolve()
        return value

    def move(self, old_id: str, new_id: str) -> Any:
        """Delete the value at old_id and set it at new_id."""
        return self.set(new_id, self.delete(old_id))

    # Accessors

    def path(self) -> str:
        """Return the path to this node from the root."""
        return self._location

    def basename(self) -> str:
        """Return the last segment of the path ("all" for "/things/good/all")."""
        return self._location.rsplit("/", 1)[-1]

    def node_names(self) -> List[str]:
        """Return the sorted names of all children."""
        return sorted(self._children)

    def nodes(self) -> List[Any]:
        """Return every child, loading any that are still pending."""
        return [self.child(name) for name in self.node_names()]

    def branch_names(self) -> List[str]:
        """Return the sorted names of children that are branches."""
        return [name for name in self.node_names() if is_branch(self.child(name))]

    def branches(self) -> List["TreeFileNode"]:
        return [self.child(name) for name in self.branch_names()]

    def child(self, name: str) -> Any:
        """Return the direct child called name, or None.

        Unlike get(), name is not split on slashes and the not_found
        callback is not called.
        """
        value = self._lookup(name)
        return None if value is _MISSING else value

    def is_loaded(self, name: str) -> bool:
        """Check if the child called name exists and has been read."""
        return name in self._children and not isinstance(self._children[name], Pending)

    def data(self) -> Dict[str, Any]:
        """Return the whole sub-tree as plain nested dicts.

        Every pending child below this node is loaded.
        """
        data = {}
        for name in self.node_names():
            value = self.child(name)
            data[name] = value.data() if is_branch(value) else value
        return data

    # Representation

    def type(self, new_type: Any = _UNCHANGED) -> Optional[RepresentationType]:
        """Get or set the on-disk representation of this branch.

        With no argument, return the current override. None clears it, so
        write() goes back to inferring the shape from the disk. "dir" or
        "file" sets it.

        Raises:
            InvalidTypeError: For any other value
        """
        if new_type is _UNCHANGED:
            return self._type
        if new_type is None:
            self._type = None
            return None
        self._type = RepresentationType.parse(new_type)
        return self._type

    def explode(self) -> RepresentationType:
        """Write this branch as a directory from now on."""
        return self.type(RepresentationType.DIR)

    def collapse(self) -> RepresentationType:
        """Write this branch as a single file from now on."""
        return self.type(RepresentationType.FILE)

    def write(self, basedir: Optional[str] = None) -> str:
        """Write this branch to disk.

        Args:
            basedir: Directory to write under instead of the tree's own root

        Returns:
            The path written
        """
        return self._context.writer.write(self, basedir)

    def close(self) -> None:
        """Close the lock file handle held by this node's tree.

        The tree can still be used; the next load or write reopens it.
        """
        self._context.close()

    # Container protocol

    def __contains__(self, node_id: object) -> bool:
        if not isinstance(node_id, str):
            return False
        node_id = node_id.lstrip("/")
        if not node_id:
            return False
        head, _, rest = node_id.partition("/")
        value = self._lookup(head)
        if value is _MISSING:
            return False
        if rest:
            return is_branch(value) and rest in value
        return True

    def __iter__(self) -> Iterator[str]:
        return iter(self.node_names())

    def __len__(self) -> int:
        return len(self._children)

    def __repr__(self) -> str:
        return f"TreeFileNode(location={self._location!r}, children={len(self._children)})"


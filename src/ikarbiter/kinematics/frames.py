"""
Static named-frame tree.

A minimal frame-transform lookup: each frame is registered with a parent and
its pose relative to that parent. Poses can then be re-expressed between any
two frames sharing a root.
"""

from compas.geometry import Frame, Transformation

from ikarbiter.core.exceptions import FrameTransformError


class FrameTree:
    """
    Tree of named frames with fixed relative poses.

    Example:
        >>> tree = FrameTree("world")
        >>> tree.add_frame("base_link", "world", Frame([0, 0, 0.5], [1, 0, 0], [0, 1, 0]))
        >>> pose_in_world = tree.transform(Frame.worldXY(), "base_link", "world")
    """

    def __init__(self, root: str = "world") -> None:
        self.root = root
        self._parents: dict[str, tuple[str, Transformation]] = {}

    @property
    def frames(self) -> list[str]:
        return [self.root, *self._parents]

    def add_frame(self, name: str, parent: str, pose: Frame) -> None:
        """
        Register ``name`` with its pose expressed in ``parent``.

        Raises:
            ValueError: If the name is taken or the parent is unknown.
        """
        if name == self.root or name in self._parents:
            raise ValueError(f"Frame already registered: {name}")
        if parent != self.root and parent not in self._parents:
            raise ValueError(f"Unknown parent frame: {parent}")
        self._parents[name] = (parent, Transformation.from_frame(pose))

    def _to_root(self, name: str) -> Transformation:
        # Maps coordinates expressed in `name` into the root frame.
        transform = Transformation()
        while name != self.root:
            if name not in self._parents:
                raise KeyError(name)
            parent, local = self._parents[name]
            transform = local * transform
            name = parent
        return transform

    def transform(self, frame: Frame, source_frame: str, target_frame: str) -> Frame:
        if source_frame == target_frame:
            return frame.copy()
        try:
            source_to_root = self._to_root(source_frame)
            target_to_root = self._to_root(target_frame)
        except KeyError as e:
            raise FrameTransformError(
                f"Unknown frame: {e.args[0]}",
                source_frame=source_frame,
                target_frame=target_frame,
            ) from None
        return frame.transformed(target_to_root.inverted() * source_to_root)

"""
AVLNode - self-balancing binary tree node with rotation primitives.
"""

import logging
from dataclasses import dataclass
from typing import Any

from avlset.models.exceptions import TreeInvariantError

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class AVLNode:
    """
    Node in the AVL tree.

    Attributes:
        value: The stored value. Ordering is the only comparison used.
        left: Subtree of smaller values (None if empty).
        right: Subtree of greater values (None if empty).
        height: Cached height of the subtree rooted here. An empty
            subtree counts 0, so a leaf stores 1.

    Rotations swap values between this node and a child and relink the
    subtrees, so this object stays the root of its subtree afterwards.
    Callers holding a reference to a node on an insertion path can keep
    using it after rebalancing, but the value it holds may change.
    """

    value: Any
    left: "AVLNode | None" = None
    right: "AVLNode | None" = None
    height: int = 1

    def left_height(self) -> int:
        return self.left.height if self.left is not None else 0

    def right_height(self) -> int:
        return self.right.height if self.right is not None else 0

    def update_height(self) -> None:
        """Recompute height from the children's cached heights."""
        self.height = 1 + max(self.left_height(), self.right_height())

    def balance_factor(self) -> int:
        """Left height minus right height. Positive means left-heavy."""
        return self.left_height() - self.right_height()

    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def rotate_left(self) -> bool:
        """
        Left rotation around the right child.

        Before:            After:
            A                  B
           / \\               / \\
          L   B              A   RR
             / \\           / \\
            RL  RR         L   RL

        Returns:
            True if rotated, False if there is no right child.
        """
        pivot = self.right
        if pivot is None:
            logger.warning(f"rotate_left on {self.value!r} without a right child")
            return False

        self.value, pivot.value = pivot.value, self.value
        self.right = pivot.right
        pivot.right = pivot.left
        pivot.left = self.left
        self.left = pivot

        pivot.update_height()
        self.update_height()
        return True

    def rotate_right(self) -> bool:
        """
        Right rotation around the left child. Mirror of rotate_left.

        Returns:
            True if rotated, False if there is no left child.
        """
        pivot = self.left
        if pivot is None:
            logger.warning(f"rotate_right on {self.value!r} without a left child")
            return False

        self.value, pivot.value = pivot.value, self.value
        self.left = pivot.left
        pivot.left = pivot.right
        pivot.right = self.right
        self.right = pivot

        pivot.update_height()
        self.update_height()
        return True

    def rebalance(self) -> bool:
        """
        Restore the AVL balance of this subtree with single or double rotations.

        Expects the children to be balanced and this node's height to be
        up to date.

        Returns:
            True if any rotation was applied, False otherwise.

        Raises:
            TreeInvariantError: If the balance factor is outside [-2, 2].
        """
        balance = self.balance_factor()

        if balance == -2:
            # Right-left case
            if self.right.balance_factor() == 1:
                logger.debug(f"Double rotation (right-left) at {self.value!r}")
                self.right.rotate_right()
            else:
                logger.debug(f"Single left rotation at {self.value!r}")
            return self.rotate_left()

        if balance == 2:
            # Left-right case
            if self.left.balance_factor() == -1:
                logger.debug(f"Double rotation (left-right) at {self.value!r}")
                self.left.rotate_left()
            else:
                logger.debug(f"Single right rotation at {self.value!r}")
            return self.rotate_right()

        if -1 <= balance <= 1:
            return False

        raise TreeInvariantError(f"Balance factor {balance} out of range", self.value)

"""
Per-file analysis context.

`LintContext` resolves the libcst metadata the rules and trackers need once per
file and answers three kinds of queries about the tree:

1.  **Ancestors**: parent and ancestor chains (`ParentNodeProvider`).
2.  **Positions**: line/column ranges for reports (`PositionProvider`).
3.  **Bindings**: single-hop resolution of a variable reference to the
    initializer of its nearest binding (`ScopeProvider`).

Only one level of indirection is resolved. There is no alias or points-to
analysis: ``a = b`` resolves ``a`` to the expression ``b``, not to whatever
``b`` is bound to.
"""

import logging
from pathlib import Path
from typing import Iterator, List, Mapping, Optional, Tuple

import libcst as cst
from libcst.metadata import (
  Assignment,
  ClassScope,
  CodeRange,
  GlobalScope,
  MetadataWrapper,
  ParentNodeProvider,
  PositionProvider,
  ScopeProvider,
)
from libcst.metadata import Scope as LexicalScope


class LintContext:
  """
  Metadata-backed view of a single parsed module.

  Attributes:
      module (cst.Module): The tree the metadata was computed for. Rules must
          visit this exact tree, since metadata is keyed by node identity.
      path (Optional[Path]): The file the module was read from, if any.
  """

  def __init__(self, wrapper: MetadataWrapper, path: Optional[Path] = None, logger: Optional[logging.Logger] = None):
    """
    Resolves scope, parent and position metadata for the wrapped module.

    Args:
        wrapper: The metadata wrapper around the parsed module.
        path: Source path used in reports.
        logger: Logger for resolution traces.
    """
    self.wrapper = wrapper
    self.module: cst.Module = wrapper.module
    self.path = path
    self._logger = logger or logging.getLogger(__name__)

    resolved = wrapper.resolve_many([ScopeProvider, ParentNodeProvider, PositionProvider])
    self._scopes: Mapping[cst.CSTNode, Optional[LexicalScope]] = resolved[ScopeProvider]
    self._parents: Mapping[cst.CSTNode, cst.CSTNode] = resolved[ParentNodeProvider]
    self._positions: Mapping[cst.CSTNode, CodeRange] = resolved[PositionProvider]

  @classmethod
  def from_source(
    cls, code: str, path: Optional[Path] = None, logger: Optional[logging.Logger] = None
  ) -> "LintContext":
    """
    Parses `code` and builds a context for it.

    Args:
        code: Python source text.
        path: Source path used in reports.
        logger: Logger for resolution traces.

    Returns:
        LintContext: The context of the parsed module.

    Raises:
        libcst.ParserSyntaxError: If the code does not parse.
    """
    return cls(MetadataWrapper(cst.parse_module(code)), path=path, logger=logger)

  # --- Tree queries ---

  def get_parent(self, node: cst.CSTNode) -> Optional[cst.CSTNode]:
    """Returns the parent of `node`, or None for the module."""
    return self._parents.get(node)

  def ancestors(self, node: cst.CSTNode) -> Iterator[cst.CSTNode]:
    """
    Iterates the enclosing nodes of `node`, nearest first, up to the module.

    Args:
        node: The starting node (not included).

    Yields:
        cst.CSTNode: Each ancestor in turn.
    """
    current = self.get_parent(node)
    while current is not None:
      yield current
      current = self.get_parent(current)

  def get_position(self, node: cst.CSTNode) -> Optional[CodeRange]:
    """Returns the source range of `node` (1-based lines, 0-based columns)."""
    return self._positions.get(node)

  def get_source(self, node: cst.CSTNode) -> str:
    """Returns the source code of `node`."""
    return self.module.code_for_node(node)

  def get_scope(self, node: cst.CSTNode) -> Optional[LexicalScope]:
    """Returns the lexical scope `node` belongs to."""
    return self._scopes.get(node)

  # --- Binding resolution ---

  def find_binding_value(self, name: cst.Name) -> Optional[cst.BaseExpression]:
    """
    Finds the initializer expression of the binding `name` refers to.

    Walks the lexical scope chain outwards from the reference and stops at the
    first scope that binds the name (or at the global scope). Within that scope
    the last binding preceding the reference wins; if all bindings follow the
    reference (e.g. a module constant used inside a function defined above it)
    the last binding overall is used.

    Args:
        name: A variable reference.

    Returns:
        Optional[cst.BaseExpression]: The initializer, or None if the name is
        unbound or bound without an initializer (parameters, imports, defs,
        loop targets, tuple unpacking).
    """
    for scope in self._scope_chain(self.get_scope(name)):
      bindings = [a for a in scope.assignments[name.value] if isinstance(a, Assignment)]
      if not bindings:
        continue
      binding = self._select_binding(bindings, name)
      value = self._initializer_of(binding.node)
      self._logger.debug(
        "Value of %s is %s", name.value, self.get_source(value) if value is not None else "<unresolved>"
      )
      return value

    self._logger.debug("Variable %s is not bound in any enclosing scope", name.value)
    return None

  def _scope_chain(self, scope: Optional[LexicalScope]) -> Iterator[LexicalScope]:
    """
    Yields `scope` and its enclosing scopes up to and including the global scope.

    Class scopes are skipped once the walk has left them, matching Python's
    name lookup for methods.
    """
    start = scope
    while scope is not None:
      if scope is start or not isinstance(scope, ClassScope):
        yield scope
      if isinstance(scope, GlobalScope) or scope.parent is scope:
        return
      scope = scope.parent

  def _select_binding(self, bindings: List[Assignment], reference: cst.CSTNode) -> Assignment:
    ref_pos = self._start_of(reference)
    ordered = sorted(bindings, key=lambda a: self._start_of(a.node))
    preceding = [a for a in ordered if self._start_of(a.node) < ref_pos]
    return preceding[-1] if preceding else ordered[-1]

  def _start_of(self, node: cst.CSTNode) -> Tuple[int, int]:
    pos = self.get_position(node)
    if pos is None:
      return (0, 0)
    return (pos.start.line, pos.start.column)

  def _initializer_of(self, node: cst.CSTNode) -> Optional[cst.BaseExpression]:
    owner = node
    if isinstance(node, cst.Name):
      owner = self.get_parent(node)
      if isinstance(owner, cst.AssignTarget):
        owner = self.get_parent(owner)

    if isinstance(owner, (cst.Assign, cst.AnnAssign, cst.NamedExpr)):
      return owner.value
    return None

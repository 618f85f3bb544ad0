"""
Response Classification Base.

Classifiers answer questions about expressions passed to the conversation
object. A classification is a pair ``(certain, result)``: when ``certain`` is
False the expression could not be judged statically (an arbitrary call, an
attribute access, a starred argument, an unresolvable variable) and
``result`` carries no information. Callers decide how to treat uncertainty.

The base class also hosts the two structural predicates shared by all rules:

*   `is_action_call`: ``conv.ask(...)`` and friends.
*   `is_handler_registration`: ``app.intent(...)`` where ``app`` was created by
    a known app factory.
"""

import logging
from typing import NamedTuple, Optional, Tuple, Union

import libcst as cst

from convlint.config import LintConfig

FunctionNode = Union[cst.FunctionDef, cst.Lambda]

# Helper kinds of the Actions on Google client library.
HELPER_CLASSES: Tuple[str, ...] = (
  "SignIn",
  "RegisterUpdate",
  "DeepLink",
  "DateTime",
  "Confirmation",
  "NewSurface",
  "Place",
  # transactions
  "CompletePurchase",
  "Decision",
  "DeliveryAddress",
  "TransactionRequirements",
  # permissions
  "Permission",
  "PermissionOptions",
  "UpdatePermission",
  # options
  "List",
  "Carousel",
)

# Expressions whose value cannot be judged without running the code.
UNCERTAIN_NODES = (cst.Attribute, cst.Subscript, cst.StarredElement, cst.Await, cst.IfExp)

CONSTANT_NAMES = ("None", "True", "False")


class Classification(NamedTuple):
  """
  Outcome of classifying one expression.

  Attributes:
      certain (bool): Whether the expression could be judged statically.
      result (bool): The verdict. Only meaningful when `certain` is True.
  """

  certain: bool
  result: bool


class ResponseClassifier:
  """
  Base classifier with the structural predicates over client library calls.

  Subclasses implement `_classify_expression`.
  """

  def __init__(self, context=None, config: Optional[LintConfig] = None, logger: Optional[logging.Logger] = None):
    """
    Args:
        context: The `LintContext` of the analysed file. Needed for variable
            resolution and for finding the registration of lambdas.
        config: Vocabulary of the client library. Defaults to `LintConfig()`.
        logger: Logger for uncertain classifications.
    """
    self._context = context
    self.config = config or LintConfig()
    self._logger = logger or logging.getLogger(__name__)

  def classify(self, node: cst.CSTNode) -> Classification:
    """
    Classifies an argument or expression.

    Args:
        node: A call argument (`cst.Arg`) or an expression.

    Returns:
        Classification: The verdict.
    """
    if isinstance(node, cst.Arg):
      if node.star:
        return self._create_response(False, False)
      node = node.value
    return self._classify_expression(node, resolve=True)

  def _classify_expression(self, node: cst.BaseExpression, resolve: bool) -> Classification:
    """
    Classifies a bare expression.

    Args:
        node: The expression.
        resolve: Whether a variable reference may still be followed to its
            initializer. Only one hop is followed.
    """
    raise NotImplementedError("implement in child subclasses.")

  def _classify_name(self, name: cst.Name, resolve: bool) -> Classification:
    """Classifies a variable reference by the initializer of its binding."""
    if not resolve or self._context is None:
      return self._create_response(False, False)

    value = self._context.find_binding_value(name)
    if value is None:
      self._logger.debug("Variable %s was referenced, but its value could not be found", name.value)
      return self._create_response(False, False)
    return self._classify_expression(value, resolve=False)

  # --- Structural predicates ---

  def is_action_call(self, node: Optional[cst.CSTNode]) -> bool:
    """
    Checks if node is a client library call producing a response.

    Example::

        conv.ask("hello")  # yes
        my_func()          # no

    Args:
        node: Any node.

    Returns:
        bool: True for ``<conversation>.<response method>(...)``.
    """
    if not isinstance(node, cst.Call) or not isinstance(node.func, cst.Attribute):
      return False
    receiver = node.func.value
    return (
      isinstance(receiver, cst.Name)
      and receiver.value in self.config.conversation_names
      and node.func.attr.value in self.config.response_methods
    )

  def is_handler_registration(self, node: Optional[cst.CSTNode], decorator: bool = False) -> bool:
    """
    Checks if node registers an intent handler on a fulfillment app.

    Example::

        app = dialogflow()

        @app.intent("a")                       # handler (decorator form)
        def a(conv): ...

        app.intent("b", lambda conv: ...)      # handler
        app.intent("c", some_function)         # not a handler
        app.intent("d", "handler_name")        # not a handler

    Args:
        node: A call, or a `cst.Decorator`.
        decorator: Whether `node` is used as a decorator. Argument shape is
            only checked for the call form.

    Returns:
        bool: True if `node` is a registration call.
    """
    if isinstance(node, cst.Decorator):
      node, decorator = node.decorator, True
    if not isinstance(node, cst.Call) or not isinstance(node.func, cst.Attribute):
      return False
    if node.func.attr.value not in self.config.registration_methods:
      return False
    if not self._is_app_reference(node.func.value):
      return False
    if decorator:
      return True

    args = node.args
    if args and isinstance(args[-1].value, cst.BaseString):
      return False
    # app.intent("name", function_reference) registers a def checked on its own
    return not (len(args) == 2 and isinstance(args[1].value, cst.Name))

  def handler_registration_of(self, function: cst.CSTNode) -> Optional[cst.CSTNode]:
    """
    Finds the registration that makes `function` an intent handler.

    Args:
        function: A `cst.FunctionDef` or `cst.Lambda`.

    Returns:
        Optional[cst.CSTNode]: The registering decorator or call, or None.
    """
    if isinstance(function, cst.FunctionDef):
      for decorator in function.decorators:
        if self.is_handler_registration(decorator):
          return decorator
      return None

    if isinstance(function, cst.Lambda) and self._context is not None:
      parent = self._context.get_parent(function)
      if isinstance(parent, cst.Arg):
        call = self._context.get_parent(parent)
        if self.is_handler_registration(call):
          return call
    return None

  def is_handler(self, function: cst.CSTNode) -> bool:
    """Returns True if `function` is a registered intent handler."""
    return self.handler_registration_of(function) is not None

  # --- Helpers ---

  def _is_app_reference(self, node: cst.BaseExpression) -> bool:
    if not isinstance(node, cst.Name) or self._context is None:
      return False
    value = self._context.find_binding_value(node)
    return isinstance(value, cst.Call) and callee_name(value) in self.config.app_factories

  def _create_response(self, certain: bool, result: bool) -> Classification:
    """Factory method for classifier verdicts."""
    return Classification(certain=certain, result=result)


def callee_name(call: cst.Call) -> Optional[str]:
  """
  Returns the called name: ``f`` for ``f()`` and ``g`` for ``a.b.g()``.

  Args:
      call: The call expression.

  Returns:
      Optional[str]: The name, or None for computed callees.
  """
  if isinstance(call.func, cst.Name):
    return call.func.value
  if isinstance(call.func, cst.Attribute):
    return call.func.attr.value
  return None


def construction_name(call: cst.Call) -> Optional[str]:
  """
  Returns the class name if `call` instantiates a class.

  Class names are recognized by the CapWords convention.

  Args:
      call: The call expression.

  Returns:
      Optional[str]: The class name, or None for ordinary function calls.
  """
  name = callee_name(call)
  if name and name[0].isupper():
    return name
  return None

"""
Response Classifiers.

Judge expressions handed to the conversation object, and recognize client
library calls and intent handler registrations.
"""

from convlint.classifier.base import HELPER_CLASSES, Classification, ResponseClassifier
from convlint.classifier.helper import HelperResponseClassifier
from convlint.classifier.simple import SimpleResponseClassifier

__all__ = [
  "Classification",
  "HELPER_CLASSES",
  "HelperResponseClassifier",
  "ResponseClassifier",
  "SimpleResponseClassifier",
]

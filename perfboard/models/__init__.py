from perfboard.models.employee import Employee
from perfboard.models.evaluation import Evaluation
from perfboard.models.evaluation_score import EvaluationScore

__all__ = [ "Employee", "Evaluation", "EvaluationScore" ]

# flake8: noqa

from .training_rules import TrainingRuleSet, TrainingSample

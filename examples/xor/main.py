import matplotlib.pyplot as plt
import numpy as np

from ffnn import TrainingRuleSet, UnitNetwork
from ffnn.core.logger import TrainingLogger
from ffnn.visualize import plot_error_history


random_state = np.random.RandomState(1234)


# The XOR truth table #########################################################

rules = TrainingRuleSet(n_input=2, n_output=1)
rules.add([0, 0], [0])
rules.add([0, 1], [1])
rules.add([1, 0], [1])
rules.add([1, 1], [0])

# Assemble the network and train it ###########################################

network = UnitNetwork(n_input=2, n_hidden=2, n_output=1,
                      learning_rate=1.0, random_state=random_state)

logger = TrainingLogger(filename='xor-log.txt')

errors = network.train(rules, max_epochs=5000, tol=0.1,
                       logger=logger, log_every=250)

for sample in rules:
    output = network.predict(sample.input)
    logger.info("{} => {:.3f} (expected {})".format(
        sample.input, output[0], sample.expected[0]))

logger.close()

plot_error_history(errors, tol=0.1)
plt.show()

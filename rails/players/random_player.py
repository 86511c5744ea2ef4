import random


def random_choose(prompt, rng=random, pass_probability=0.05):
    """Pick uniformly among the options of ``prompt``; passes now and then when allowed."""
    options = sorted(prompt.choices())
    if prompt.can_pass and (not options or rng.random() < pass_probability):
        return ""
    return rng.choice(options)


class RandomInput:
    def __init__(self, seed=None, pass_probability=0.05):
        self.rng = random.Random(seed)
        self.pass_probability = pass_probability

    def __call__(self, prompt):
        return random_choose(prompt, self.rng, self.pass_probability)

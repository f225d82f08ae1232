import matplotlib

matplotlib.use("Agg") # headless, before report imports pyplot

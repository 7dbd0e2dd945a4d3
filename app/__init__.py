"""
Command-line driver, dataset loaders and configuration for the KNN classifier
"""

"""
Visualization utilities for the KNN classifier
Generates the confusion matrix plot of an evaluation run
"""

import matplotlib
matplotlib.use('Agg')  # Use non-interactive backend
import matplotlib.pyplot as plt
import seaborn as sns
import numpy as np

from app.utils import ensure_parent_directory


def create_confusion_matrix(cm, classes, output_path):
    """
    Save a confusion matrix heatmap as a PNG file

    Args:
        cm: Confusion matrix, rows are true labels
        classes: Label names in matrix order
        output_path: Destination PNG path

    Returns:
        The output path
    """
    cm = np.asarray(cm)

    fig, ax = plt.subplots(figsize=(8, 6))
    sns.heatmap(cm, annot=True, fmt='d', cmap='Blues',
                xticklabels=classes, yticklabels=classes,
                ax=ax, cbar_kws={'label': 'Count'})
    ax.set_title('Confusion Matrix', fontsize=14, fontweight='bold')
    ax.set_ylabel('True Label', fontsize=12)
    ax.set_xlabel('Predicted Label', fontsize=12)

    ensure_parent_directory(output_path)
    fig.savefig(output_path, format='png', bbox_inches='tight', dpi=100)
    plt.close(fig)

    return output_path

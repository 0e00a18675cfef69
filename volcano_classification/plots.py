"""
Plots for the volcano analysis. All plots use seaborn for consistent styling;
the maps draw on a cartopy PlateCarree world.
"""
import cartopy.crs as ccrs
import cartopy.feature as cfeature
import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns

from volcano_classification import config


def labeled_barplot(data, feature, perc=False, n=None):
    """
    Barplot with percentage at the top

    data: dataframe
    feature: dataframe column
    perc: whether to display percentages instead of count (default is False)
    n: displays the top n category levels (default is None, i.e., display all levels)
    """
    total = len(data[feature])
    count = data[feature].nunique()
    n = count if n is None else n
    fig = plt.figure(figsize=(n + 3, 6))

    ax = sns.countplot(data=data, x=feature, hue=feature, legend=False, palette='Set2',
                       order=data[feature].value_counts().index[:n])
    for p in ax.patches:
        height = p.get_height()
        label = f"{100 * height / total:.1f}%" if perc else f"{height:.0f}"
        ax.annotate(label, (p.get_x() + p.get_width() / 2, height), ha='center', va='center',
                    size=12, xytext=(0, 5), textcoords='offset points')
    top_col = '' if count <= n else f'(Top {n} categories)'
    plt.title(f'Distribution of {feature} {top_col}', fontsize=16, fontweight='bold')
    plt.tight_layout()
    return fig


def _world_axes(figsize=(12, 6)):
    fig = plt.figure(figsize=figsize)
    ax = fig.add_subplot(1, 1, 1, projection=ccrs.PlateCarree())
    ax.set_global()
    ax.add_feature(cfeature.LAND, facecolor='lightgray', zorder=0)
    ax.coastlines(linewidth=0.4, color='gray')
    return fig, ax


def plot_volcano_map(data):
    """World map of every volcano, colored by volcano type."""
    fig, ax = _world_axes()
    palette = dict(zip(config.CLASSES, sns.color_palette('Set2', len(config.CLASSES))))
    for volcano_type, group in data.groupby(config.TARGET):
        ax.scatter(group['longitude'], group['latitude'], s=6, alpha=0.8,
                   color=palette.get(volcano_type), label=volcano_type,
                   transform=ccrs.PlateCarree())
    ax.legend(loc='lower left', fontsize=10, title='Volcano type', title_fontsize=11)
    plt.title('Volcanoes of the World by Type', fontsize=16, fontweight='bold')
    plt.tight_layout()
    return fig


def plot_accuracy_hexmap(joined, gridsize=config.HEX_GRIDSIZE):
    """
    Hex-binned mean held-out accuracy over the world map.

    joined: predictions from metrics.with_coordinates
    """
    fig, ax = _world_axes()
    hexes = ax.hexbin(joined['longitude'], joined['latitude'],
                      C=joined['correct'].astype(float), reduce_C_function=np.mean,
                      gridsize=gridsize, extent=(-180, 180, -90, 90), cmap='viridis',
                      vmin=0, vmax=1, alpha=0.8, transform=ccrs.PlateCarree())
    cb = fig.colorbar(hexes, ax=ax, shrink=0.7, label='Mean accuracy')
    cb.ax.tick_params(labelsize=10)
    plt.title('Held-out Accuracy by Location', fontsize=16, fontweight='bold')
    plt.tight_layout()
    return fig


def plot_confusion_matrix(cm):
    """
    To plot the pooled confusion matrix with percentages

    cm: dataframe, truth x prediction counts
    """
    values = cm.to_numpy()
    labels = np.asarray([f"{item:0.0f}\n{item / values.sum():.2%}"
                         for item in values.flatten()]).reshape(values.shape)

    fig = plt.figure(figsize=(8, 6))
    sns.heatmap(cm, annot=labels, fmt='', cmap='Blues')
    plt.ylabel('True label')
    plt.xlabel('Predicted label')
    plt.title('Confusion Matrix with Percentages', fontsize=16, fontweight='bold')
    plt.tight_layout()
    return fig


def plot_variable_importance(importance, top=10):
    """Horizontal barplot of the `top` permutation importances."""
    top_imp = importance.head(top)
    fig = plt.figure(figsize=(9, 7))
    sns.barplot(data=top_imp, x='importance', y='feature', hue='feature', legend=False,
                palette='viridis')
    plt.errorbar(top_imp['importance'], np.arange(len(top_imp)), xerr=top_imp['std'],
                 fmt='none', ecolor='black', capsize=3)
    plt.xlabel('Permutation importance', fontsize=14, fontweight='bold')
    plt.ylabel('Feature', fontsize=14, fontweight='bold')
    plt.title(f'Top {len(top_imp)} Variable Importances', fontsize=16, fontweight='bold')
    plt.tight_layout()
    return fig


def save_importance_table(importance, filename, top=10):
    """Render the top importances as a matplotlib table image."""
    fig, ax = plt.subplots(figsize=(8, 4))
    ax.axis('off')
    ax.axis('tight')
    table_data = importance.head(top)[['feature', 'importance']]
    cell_text = [[feature, f"{value:.3f}"] for feature, value in table_data.itertuples(index=False)]
    table = ax.table(cellText=cell_text, colLabels=['Feature', 'Importance'],
                     colWidths=[0.7, 0.3], loc='center', cellLoc='left')
    table.auto_set_font_size(False)
    table.set_fontsize(14)
    table.scale(1.5, 1.5)
    plt.title('Permutation Variable Importance', fontsize=16, fontweight='bold')
    fig.savefig(filename, bbox_inches='tight', dpi=150)
    plt.close(fig)

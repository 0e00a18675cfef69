#!/usr/bin/env python
# coding: utf-8

# # Volcano Type Classification
#

# In[1]:


"""
Volcano Type Classification Script
Predict whether a volcano is a Stratovolcano, a Shield volcano or Other from its
location, elevation, tectonic setting and dominant rock type.
All plots use seaborn for consistent styling.
"""
# =========================================================================
# Import Python Libraries
#
# ==========================================================================
import logging
import os
import warnings

import joblib
import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns

from volcano_classification import config
from volcano_classification.data import derive_labels, load_volcanoes
from volcano_classification.evaluate import fit_resamples
from volcano_classification.metrics import (accuracy_hexbins, collect_metrics,
                                            pooled_confusion_matrix, ppv_by_resample,
                                            variable_importance, with_coordinates)
from volcano_classification.model import make_classifier, make_workflow
from volcano_classification.plots import (labeled_barplot, plot_accuracy_hexmap,
                                          plot_confusion_matrix, plot_variable_importance,
                                          plot_volcano_map, save_importance_table)
from volcano_classification.preprocess import make_preprocessor, make_smote
from volcano_classification.resample import bootstraps

warnings.filterwarnings('ignore')
logging.basicConfig(level=logging.INFO,
                    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
sns.set_style('whitegrid')
sns.set_palette('Set2')
plt.rc('font', size=14, weight='bold')
plt.rc('axes', labelsize=14, titlesize=14, labelweight='bold')
plt.rc('legend', fontsize=14, title_fontsize=16)
plt.rc('xtick', labelsize=10)
plt.rc('ytick', labelsize=10)
pd.set_option('display.max_columns', None)

# =============================================================================
# Configuration
# =============================================================================
N_RESAMPLES = config.N_RESAMPLES
N_TREES = config.N_TREES
N_JOBS = -1
RANDOM_STATE = config.RANDOM_STATE

# Create output directory
output_dirs = config.OUTPUT_DIRS
for dir in output_dirs:
    os.makedirs(dir, exist_ok=True)


# ## Load Volcano Dataset
#

# In[2]:


# =============================================================================
# Load and Explore Data
# =============================================================================
raw = load_volcanoes(config.DATA_URL)
print("Data loaded. Shape:", raw.shape)
print("\nColumns:\n", raw.columns.tolist())

print("\nPrimary volcano types:")
print(raw[config.RAW_TYPE_COL].value_counts())


# In[3]:


# =============================================================================
# Derive the volcano type label
# =============================================================================
df = derive_labels(raw)
print("\nModeling table:")
print(df.info())
print("\nSummary Statistics:")
print(df.describe(include='all'))
print(df[config.TARGET].value_counts(normalize=True))

print("\nMissing Values:\n", df.isnull().sum())


# ## Exploratory Data Analysis

# In[4]:


fig = labeled_barplot(df, config.TARGET, perc=True)
fig.savefig(f'{output_dirs[0]}/class_distribution.png')
plt.close(fig)

for col in config.CATEGORICAL_COLS:
    fig = labeled_barplot(df, col, perc=True, n=10)
    plt.xticks(rotation=75)
    fig.savefig(f'{output_dirs[0]}/categorical_top10_{col}.png', bbox_inches='tight')
    plt.close(fig)

fig = plot_volcano_map(df)
fig.savefig(f'{output_dirs[0]}/volcano_map.png', dpi=150)
plt.close(fig)
print(f"EDA completed. Plots saved in '{output_dirs[0]}/'.")


# ### Preprocessing and Model Specification

# In[5]:


# =============================================================================
# Preprocessing: pool rare categories, one-hot, drop zero variance, normalize, SMOTE
# =============================================================================
workflow = make_workflow(
    preprocessor=make_preprocessor(other_threshold=config.OTHER_THRESHOLD),
    smote=make_smote(k_neighbors=config.SMOTE_NEIGHBORS, random_state=RANDOM_STATE),
    classifier=make_classifier(n_trees=N_TREES, random_state=RANDOM_STATE),
)
print(workflow)


# ### Bootstrap Resampling

# In[6]:


# =============================================================================
# Fit on every bootstrap resample
# =============================================================================
resamples = bootstraps(df, times=N_RESAMPLES, random_state=RANDOM_STATE)
results = fit_resamples(workflow, df, resamples, n_jobs=N_JOBS)
print(f"\n{results.n_successful} of {len(resamples)} resamples fit.")
for resample_id, reason in results.failures.items():
    print(f"{resample_id} skipped: {reason}")

metric_summary = collect_metrics(results.metrics)
print("\nMetrics across resamples:")
print(metric_summary)
metric_summary.to_csv(f'{output_dirs[0]}/metric_summary.csv', index=False)


# #### Confusion Matrix and PPV by Resample

# In[7]:


cm = pooled_confusion_matrix(results.predictions)
print("\nPooled confusion matrix:")
print(cm)
cm.to_csv(f'{output_dirs[0]}/confusion_matrix.csv')

fig = plot_confusion_matrix(cm)
fig.savefig(f'{output_dirs[0]}/confusion_matrix.png')
plt.close(fig)

ppv = ppv_by_resample(results.predictions)
print("\nPositive predictive value by resample:")
print(ppv.pivot(index='resample', columns='class', values='ppv'))
ppv.to_csv(f'{output_dirs[0]}/ppv_by_resample.csv', index=False)


# ### Variable Importance

# In[8]:


# =============================================================================
# Permutation importance on one model fit to all volcanoes
# =============================================================================
importance, vip_preprocessor, vip_model = variable_importance(
    df, n_trees=N_TREES, random_state=RANDOM_STATE, n_jobs=N_JOBS)
print(importance.head(10))
importance.to_csv(f'{output_dirs[0]}/variable_importance.csv', index=False)

fig = plot_variable_importance(importance)
fig.savefig(f'{output_dirs[0]}/variable_importance.png')
plt.close(fig)
save_importance_table(importance, f'{output_dirs[0]}/variable_importance_table.png')


# ### Where Are Predictions Right?

# In[9]:


joined = with_coordinates(results.predictions, df)
hexbins = accuracy_hexbins(joined)
print(f"\nMean accuracy over {len(hexbins)} hexagonal bins: {hexbins['accuracy'].mean():.3f}")

fig = plot_accuracy_hexmap(joined)
fig.savefig(f'{output_dirs[0]}/accuracy_hexmap.png', dpi=150)
plt.close(fig)


# In[10]:


# =============================================================================
# Save Variable Importance Model
# =============================================================================
joblib.dump({'preprocessor': vip_preprocessor, 'classifier': vip_model},
            f'{output_dirs[1]}/vip_model.pkl')
print(f"\nClassification completed. All plots saved in '{output_dirs[0]}/'.")
print(f"Variable importance model saved to '{output_dirs[1]}/vip_model.pkl'.")

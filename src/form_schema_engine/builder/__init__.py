"""Builder-side editing: field factory, options editor, form operations and the editing session."""

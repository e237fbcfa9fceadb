"""Host adapters embedding the navigation stack in UI toolkits."""

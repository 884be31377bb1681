"""taskmatrix - Eisenhower matrix from Google Calendar and Trello tasks."""

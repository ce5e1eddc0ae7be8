"""Eventbrite event feed: proxy, listing renderer and static site."""

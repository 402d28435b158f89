SAMPLE_WXR = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0"
    xmlns:excerpt="http://wordpress.org/export/1.2/excerpt/"
    xmlns:content="http://purl.org/rss/1.0/modules/content/"
    xmlns:wfw="http://wellformedweb.org/CommentAPI/"
    xmlns:dc="http://purl.org/dc/elements/1.1/"
    xmlns:wp="http://wordpress.org/export/1.2/">
<channel>
    <title>Test Blog</title>
    <link>http://example.com</link>
    <description>Just another blog</description>
    <language>en-US</language>
    <wp:wxr_version>1.2</wp:wxr_version>
    <wp:base_site_url>http://example.com</wp:base_site_url>
    <wp:base_blog_url>http://example.com/blog</wp:base_blog_url>
    <wp:author>
        <wp:author_id>2</wp:author_id>
        <wp:author_login><![CDATA[jane]]></wp:author_login>
        <wp:author_email><![CDATA[jane@example.com]]></wp:author_email>
        <wp:author_display_name><![CDATA[Jane]]></wp:author_display_name>
    </wp:author>
    <wp:category>
        <wp:term_id>3</wp:term_id>
        <wp:category_nicename><![CDATA[news]]></wp:category_nicename>
        <wp:category_parent><![CDATA[]]></wp:category_parent>
        <wp:cat_name><![CDATA[News]]></wp:cat_name>
        <wp:termmeta>
            <wp:meta_key><![CDATA[color]]></wp:meta_key>
            <wp:meta_value><![CDATA[blue]]></wp:meta_value>
        </wp:termmeta>
    </wp:category>
    <wp:tag>
        <wp:term_id>4</wp:term_id>
        <wp:tag_slug><![CDATA[python]]></wp:tag_slug>
        <wp:tag_name><![CDATA[Python]]></wp:tag_name>
    </wp:tag>
    <wp:term>
        <wp:term_id>5</wp:term_id>
        <wp:term_taxonomy><![CDATA[nav_menu]]></wp:term_taxonomy>
        <wp:term_slug><![CDATA[main-menu]]></wp:term_slug>
        <wp:term_name><![CDATA[Main Menu]]></wp:term_name>
    </wp:term>
    <item>
        <title>Hello world</title>
        <link>http://example.com/hello-world/</link>
        <dc:creator><![CDATA[jane]]></dc:creator>
        <guid isPermaLink="false">http://example.com/?p=1</guid>
        <content:encoded><![CDATA[<p>Welcome.</p>]]></content:encoded>
        <excerpt:encoded><![CDATA[Short]]></excerpt:encoded>
        <wp:post_id>1</wp:post_id>
        <wp:post_name><![CDATA[hello-world]]></wp:post_name>
        <wp:status><![CDATA[publish]]></wp:status>
        <wp:post_type><![CDATA[post]]></wp:post_type>
        <category domain="category" nicename="news"><![CDATA[News]]></category>
        <category domain="post_tag" nicename="python"><![CDATA[Python]]></category>
        <wp:postmeta>
            <wp:meta_key><![CDATA[_edit_last]]></wp:meta_key>
            <wp:meta_value><![CDATA[1]]></wp:meta_value>
        </wp:postmeta>
        <wp:comment>
            <wp:comment_id>10</wp:comment_id>
            <wp:comment_author><![CDATA[bob]]></wp:comment_author>
            <wp:comment_content><![CDATA[Nice post]]></wp:comment_content>
            <wp:commentmeta>
                <wp:meta_key><![CDATA[rating]]></wp:meta_key>
                <wp:meta_value><![CDATA[5]]></wp:meta_value>
            </wp:commentmeta>
        </wp:comment>
    </item>
    <item>
        <title>About</title>
        <wp:post_id>2</wp:post_id>
        <wp:post_name><![CDATA[about]]></wp:post_name>
        <wp:status><![CDATA[publish]]></wp:status>
        <wp:post_type><![CDATA[page]]></wp:post_type>
    </item>
</channel>
</rss>
"""

NO_VERSION_WXR = SAMPLE_WXR.replace("<wp:wxr_version>1.2</wp:wxr_version>", "")

MALFORMED_WXR = SAMPLE_WXR.replace("</item>\n    <item>", "</itm>\n    <item>", 1)
